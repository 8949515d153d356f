"""Server model dataclasses - What the environment reporter collects."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class DatabaseInfo:
    """Database engine and version."""

    service: str = "MySQL"  # MySQL or MariaDB
    version: str = ""


@dataclass
class WebServerInfo:
    """Web server identification.

    ``service`` is ``apache``, ``nginx`` or ``Web`` for anything else,
    in which case ``version`` holds the raw server-software string.
    """

    service: str
    version: str | None = None


@dataclass
class ServerData:
    """Snapshot of the software running a WordPress site."""

    database: DatabaseInfo = field(default_factory=DatabaseInfo)
    php: str = ""
    wp: str = ""
    web: WebServerInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form, used for caching and JSON output."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerData":
        """Rebuild from :meth:`to_dict` output; missing keys fall back to defaults."""
        database = data.get("database") or {}
        web = data.get("web") or None
        return cls(
            database=DatabaseInfo(
                service=database.get("service", "MySQL"),
                version=database.get("version") or "",
            ),
            php=data.get("php") or "",
            wp=data.get("wp") or "",
            web=WebServerInfo(service=web["service"], version=web.get("version")) if web else None,
        )

    def version_of(self, software: str) -> str | None:
        """Installed version for a software key (php, wp, mysql, mariadb, nginx, apache).

        Database and web server keys only answer for the service actually
        detected, so ``mariadb`` on a MySQL host is None.
        """
        if software == "php":
            return self.php or None
        if software == "wp":
            return self.wp or None
        if software in ("mysql", "mariadb"):
            if self.database.service.lower() != software:
                return None
            return self.database.version or None
        if software in ("nginx", "apache"):
            if not self.web or self.web.service != software:
                return None
            return self.web.version
        return None
