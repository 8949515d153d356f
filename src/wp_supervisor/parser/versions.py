"""Version parsing and extraction helpers.

Every function here is pure: it takes the raw string a scanner collected
(``php -v`` output, a database banner, a server-software header, the
contents of ``wp-includes/version.php``) and returns a typed value.
Nothing in this module runs commands or touches the cache.
"""

import re
from dataclasses import dataclass
from functools import total_ordering

from wp_supervisor.model.server import WebServerInfo

_DOTTED = re.compile(r"\d+(?:\.\d+)*")
_PHP_VERSION = re.compile(r"^(?:PHP\s+)?((?:\d+\.){2}\d+)")
_WEB_SERVICE = re.compile(r"(apache|nginx)", re.IGNORECASE)
_WEB_VERSION = re.compile(r"([0-9]+\.){2}([0-9]+)?")
_MAJOR_MINOR = re.compile(r"^\s*v?(\d+\.\d+)")
_WP_VERSION = re.compile(r"""\$wp_version\s*=\s*['"]([^'"]+)['"]""")
_MARIADB = re.compile(r"mariadb", re.IGNORECASE)
# MariaDB advertises "5.5.5-" to old MySQL clients before its real version
_MARIADB_COMPAT_PREFIX = "5.5.5-"


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A dotted numeric version such as ``8.2.10``.

    Comparison pads the shorter side with zeros, so ``8.2 == 8.2.0``
    and ``6.4 < 6.4.1``.
    """

    parts: tuple[int, ...]

    @classmethod
    def parse(cls, text: str | None) -> "Version | None":
        """Parse the first dotted number found in ``text``.

        Returns None when the text holds no digits at all.
        """
        if not text:
            return None
        match = _DOTTED.search(str(text))
        if not match:
            return None
        return cls(tuple(int(p) for p in match.group(0).split(".")))

    def _padded(self, other: "Version") -> tuple[tuple[int, ...], tuple[int, ...]]:
        width = max(len(self.parts), len(other.parts))
        return (
            self.parts + (0,) * (width - len(self.parts)),
            other.parts + (0,) * (width - len(other.parts)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._padded(other)
        return mine == theirs

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._padded(other)
        return mine < theirs

    def __hash__(self) -> int:
        parts = list(self.parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return hash(tuple(parts))

    def __str__(self) -> str:
        return ".".join(str(p) for p in self.parts)

    @property
    def major_minor(self) -> str:
        """``X.Y`` prefix (just ``X`` for single-component versions)."""
        return ".".join(str(p) for p in self.parts[:2])


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings, returning -1, 0 or 1.

    Raises:
        ValueError: If either side holds no numeric version.
    """
    a = Version.parse(left)
    b = Version.parse(right)
    if a is None or b is None:
        raise ValueError(f"Cannot compare versions {left!r} and {right!r}")
    if a == b:
        return 0
    return -1 if a < b else 1


def major_minor(version: str) -> str:
    """Reduce ``6.4.3`` to ``6.4``; strings without a minor part are returned stripped."""
    match = _MAJOR_MINOR.match(version or "")
    if match:
        return match.group(1)
    return (version or "").strip()


def extract_php_version(raw: str | None) -> str:
    """First ``X.Y.Z`` of a PHP version string (``8.2.10-1ubuntu`` or ``PHP 8.2.10 (cli)``)."""
    if not raw:
        return ""
    first_line = raw.strip().splitlines()[0] if raw.strip() else ""
    match = _PHP_VERSION.match(first_line)
    return match.group(1) if match else ""


def detect_db_service(server_info: str | None) -> str:
    """``MariaDB`` if the server banner says so, ``MySQL`` otherwise."""
    if server_info and _MARIADB.search(server_info):
        return "MariaDB"
    return "MySQL"


def extract_db_version(raw: str | None) -> str:
    """Numeric version from a database banner.

    Handles ``SELECT @@version`` output (``10.6.12-MariaDB-0ubuntu0.22.04.1``),
    server binaries (``mysqld  Ver 8.0.34-0ubuntu0.22.04.1 for Linux``) and
    the MariaDB clients (``mysql  Ver 15.1 Distrib 10.6.12-MariaDB`` and
    ``mysql from 11.4.2-MariaDB, client 15.2``).
    """
    if not raw:
        return ""
    text = raw.strip().splitlines()[0].strip() if raw.strip() else ""

    if "Distrib " in text:
        text = text.split("Distrib ", 1)[1]
    elif " from " in text:
        text = text.split(" from ", 1)[1]
    elif "Ver " in text:
        text = text.split("Ver ", 1)[1]

    text = text.strip()
    if text.startswith(_MARIADB_COMPAT_PREFIX) and _MARIADB.search(text):
        text = text[len(_MARIADB_COMPAT_PREFIX):]

    # Everything from the first character that is not a digit or dot is noise
    version = re.sub(r"[^0-9.].*", "", text)
    return version.strip(".")


def parse_server_software(raw: str | None) -> WebServerInfo | None:
    """Turn a server-software string into a web server entry.

    ``Apache/2.4.52 (Ubuntu)`` gives ``apache``/``2.4.52``; an unknown
    server keeps its raw string as the version under the ``Web`` service.
    Empty input means no web server could be identified.
    """
    if not raw or not raw.strip():
        return None
    raw = raw.strip()

    service = _WEB_SERVICE.search(raw)
    if service:
        version = _WEB_VERSION.search(raw)
        return WebServerInfo(
            service=service.group(0).lower(),
            version=version.group(0).strip() if version else None,
        )

    return WebServerInfo(service="Web", version=raw)


def extract_wp_version(version_php: str | None) -> str:
    """``$wp_version`` from the contents of ``wp-includes/version.php``."""
    if not version_php:
        return ""
    match = _WP_VERSION.search(version_php)
    return match.group(1) if match else ""
