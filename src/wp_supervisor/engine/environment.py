"""Environment Reporter - What software is this WordPress site running on?

Inspects the host once per cache window and keeps the result as a
transient. Raw strings come from the scanners; every interpretation is
done by the pure helpers in :mod:`wp_supervisor.parser.versions`.
"""

import ipaddress
import logging

import requests

from wp_supervisor.connector import Connector
from wp_supervisor.engine.hooks import SERVER_DATA_FILTER, SERVER_IP_FILTER, FilterRegistry
from wp_supervisor.model.server import DatabaseInfo, ServerData
from wp_supervisor.parser.versions import parse_server_software
from wp_supervisor.scanner.database import DatabaseScanner
from wp_supervisor.scanner.php import PHPScanner
from wp_supervisor.scanner.web import WebServerScanner
from wp_supervisor.scanner.wordpress import WordPressScanner
from wp_supervisor.storage.transients import DAY_IN_SECONDS, TransientStore

logger = logging.getLogger(__name__)


class EnvironmentReporter:
    """Collects and caches :class:`ServerData` for one site."""

    SERVER_DATA_TRANSIENT = "supv_server_data"

    def __init__(
        self,
        connector: Connector,
        store: TransientStore,
        *,
        wp_path: str = "/var/www/html",
        site_url: str | None = None,
        server_software: str | None = None,
        hooks: FilterRegistry | None = None,
        session: requests.Session | None = None,
        ttl: int = DAY_IN_SECONDS,
    ) -> None:
        self.connector = connector
        self.store = store
        self.wp_path = wp_path
        self.site_url = site_url
        self.server_software = server_software
        self.hooks = hooks or FilterRegistry()
        self.session = session
        self.ttl = ttl

    def get_data(self) -> ServerData:
        """Server data, from the cache when fresh, filtered through ``server_data``."""
        cached = self.store.get(self.SERVER_DATA_TRANSIENT)

        if cached is None:
            logger.debug("No cached server data, inspecting host")
            data = self.inspect()
            self.store.set(self.SERVER_DATA_TRANSIENT, data.to_dict(), self.ttl)
        else:
            data = ServerData.from_dict(cached)

        return self.hooks.apply_filters(SERVER_DATA_FILTER, data)

    def flush(self) -> bool:
        """Forget the cached server data."""
        return self.store.delete(self.SERVER_DATA_TRANSIENT)

    def inspect(self) -> ServerData:
        """Run every scanner against the host. Never cached."""
        php = PHPScanner(self.connector).scan()
        database = DatabaseScanner(self.connector).scan()
        wordpress = WordPressScanner(self.connector, self.wp_path).scan()
        web = WebServerScanner(
            self.connector,
            site_url=self.site_url,
            override=self.server_software,
            session=self.session,
        ).scan()

        if not php.installed:
            logger.warning("PHP interpreter not found on host")
        if not database.detected:
            logger.warning("No MySQL/MariaDB server detected on host")
        if not wordpress.installed:
            logger.warning("WordPress version file not found at %s", wordpress.version_file)

        return ServerData(
            database=DatabaseInfo(service=database.service, version=database.version),
            php=php.version,
            wp=wordpress.version,
            web=parse_server_software(web.server_software),
        )

    def get_ip(self) -> str | None:
        """The server's IP address, or None if none could be found."""
        ip = None

        result = self.connector.run("hostname -I", use_sudo=False, timeout=5)
        if result.success and result.stdout.split():
            ip = result.stdout.split()[0]

        if not ip:
            ip = self.connector.server_address()

        if ip and not _is_ip(ip):
            ip = None

        return self.hooks.apply_filters(SERVER_IP_FILTER, ip)


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True
