"""Web Server Scanner - Builds the server-software string.

Sources, first non-empty wins:
1. An explicit override from the site profile
2. ``nginx -v`` / ``apache2 -v`` / ``httpd -v`` on the host
3. The ``Server`` header the site answers with
"""

import logging
from dataclasses import dataclass

import requests

from wp_supervisor.connector import Connector

logger = logging.getLogger(__name__)


@dataclass
class WebScanResult:
    """Raw web server scan results."""

    server_software: str = ""  # e.g. "nginx/1.24.0 (Ubuntu)"
    source: str = ""  # override, binary, header


class WebServerScanner:
    """Scanner for the web server in front of WordPress."""

    # nginx prints "nginx version: nginx/1.24.0" on stderr,
    # apache prints "Server version: Apache/2.4.52 (Ubuntu)" on stdout
    BINARY_COMMANDS = [
        ("nginx -v", "nginx version:"),
        ("apache2 -v", "Server version:"),
        ("httpd -v", "Server version:"),
    ]

    def __init__(
        self,
        ssh: Connector,
        site_url: str | None = None,
        override: str | None = None,
        session: requests.Session | None = None,
        timeout: int = 10,
    ) -> None:
        self.ssh = ssh
        self.site_url = site_url
        self.override = override
        self.session = session or requests.Session()
        self.timeout = timeout

    def scan(self) -> WebScanResult:
        if self.override:
            return WebScanResult(server_software=self.override.strip(), source="override")

        software = self._from_binaries()
        if software:
            return WebScanResult(server_software=software, source="binary")

        software = self._from_header()
        if software:
            return WebScanResult(server_software=software, source="header")

        return WebScanResult()

    def _from_binaries(self) -> str:
        for command, marker in self.BINARY_COMMANDS:
            result = self.ssh.run(command, timeout=5)
            if not result.success:
                continue
            for line in result.output.splitlines():
                if marker in line:
                    return line.split(marker, 1)[1].strip()
        return ""

    def _from_header(self) -> str:
        if not self.site_url:
            return ""
        try:
            response = self.session.head(self.site_url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("Server header probe of %s failed: %s", self.site_url, e)
            return ""
        return (response.headers.get("Server") or "").strip()
