"""Status classification - Installed version versus requirements.

Everything here is a pure function of its arguments. The Server facade
resolves the inputs (cached server data, cached requirements) and calls in.
"""

import re

from wp_supervisor.model.requirements import Requirements, Status
from wp_supervisor.model.server import ServerData
from wp_supervisor.parser.versions import Version, major_minor

SOFTWARE_KEYS = ("php", "mysql", "mariadb", "wp", "nginx", "apache")

_SOFTWARE_PATTERN = re.compile(r"php|mysql|mariadb|wp|nginx|apache")
_WEB_SOFTWARE = ("nginx", "apache")


def is_known_software(software: str) -> bool:
    return bool(_SOFTWARE_PATTERN.fullmatch(software or ""))


def classify(current: str, recommended: str, minimum: str) -> Status:
    """Classify ``current`` against ``recommended`` and ``minimum``.

    - current >= recommended: updated
    - minimum <= current < recommended: outdated
    - current < minimum: obsolete

    Raises:
        ValueError: If any of the three strings is not a version.
    """
    cur = Version.parse(current)
    rec = Version.parse(recommended)
    low = Version.parse(minimum)
    if cur is None or rec is None or low is None:
        raise ValueError(
            f"Cannot classify {current!r} against recommended={recommended!r}, minimum={minimum!r}"
        )

    if cur >= rec:
        return Status.UPDATED
    if cur >= low:
        return Status.OUTDATED
    return Status.OBSOLETE


def resolve_wordpress_requirement(installed: str, releases: list[str]) -> tuple[str, str] | None:
    """Recommended and minimum WordPress versions for an install.

    ``releases`` is newest first. The recommended version is the newest
    release on the installed major.minor branch (the newest release
    overall when the branch is unknown); the minimum is the major.minor
    of the oldest release.
    """
    if not releases:
        return None

    branch = major_minor(installed)
    recommended = next((r for r in releases if major_minor(r) == branch), releases[0])
    return recommended, major_minor(releases[-1])


def resolve_requirement(software: str, requirements: Requirements, installed: str = "") -> tuple[str, str] | None:
    """(recommended, minimum) for ``software``, or None when the document lacks it."""
    if software == "wp":
        return resolve_wordpress_requirement(installed, requirements.wordpress_releases)

    entry = requirements.for_software(software)
    if entry is None:
        return None

    minimum = entry.minimum
    if software in _WEB_SOFTWARE:
        # Web servers publish their supported releases, oldest last
        minimum = entry.versions[-1] if entry.versions else None

    if not entry.recommended or not minimum:
        return None
    return str(entry.recommended), str(minimum)


def relevant_software(data: ServerData) -> list[str]:
    """Software keys that apply to this server (its database and web server only)."""
    keys = ["php", "wp"]
    database = data.database.service.lower()
    if database in ("mysql", "mariadb"):
        keys.append(database)
    if data.web and data.web.service in _WEB_SOFTWARE:
        keys.append(data.web.service)
    return keys
