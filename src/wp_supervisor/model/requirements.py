"""Requirements model - The remote requirements document and derived status.

The API answers with a JSON object shaped like::

    {
      "php":       {"recommended": "8.3", "minimum": "7.4"},
      "mysql":     {"recommended": "8.0", "minimum": "5.7"},
      "mariadb":   {"recommended": "11.4", "minimum": "10.4"},
      "nginx":     {"recommended": "1.26.1", "versions": ["1.26.1", ..., "1.20.2"]},
      "apache":    {"recommended": "2.4.62", "versions": ["2.4.62", ..., "2.4.41"]},
      "wordpress": ["6.6.1", "6.5.5", ..., "4.1.40"]
    }

Version lists are ordered newest first.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(str, Enum):
    """How a piece of software compares to its requirements."""

    UPDATED = "updated"
    OUTDATED = "outdated"
    OBSOLETE = "obsolete"


@dataclass
class SoftwareRequirement:
    """Requirement entry for one software key."""

    recommended: str | None = None
    minimum: str | None = None
    versions: list[str] = field(default_factory=list)


@dataclass
class Requirements:
    """Read-only view over the raw requirements document."""

    raw: dict[str, Any]

    @property
    def wordpress_releases(self) -> list[str]:
        """Known WordPress releases, newest first."""
        releases = self.raw.get("wordpress")
        if releases is None:
            releases = self.raw.get("wp")
        if not isinstance(releases, list):
            return []
        return [str(r) for r in releases if r]

    def for_software(self, software: str) -> SoftwareRequirement | None:
        """Requirement entry for ``software``, or None when the document lacks it."""
        entry = self.raw.get(software)
        if not isinstance(entry, dict):
            return None
        versions = entry.get("versions") or []
        return SoftwareRequirement(
            recommended=entry.get("recommended"),
            minimum=entry.get("minimum"),
            versions=[str(v) for v in versions if v],
        )
