"""Database Scanner - Identifies the MySQL/MariaDB server and its version.

The server is asked directly (``SELECT @@version``) when the local client
can log in through the socket; otherwise the server binary banner is used.
"""

from dataclasses import dataclass

from wp_supervisor.connector import Connector
from wp_supervisor.parser.versions import detect_db_service, extract_db_version


@dataclass
class DatabaseScanResult:
    """Raw database scan results."""

    server_info: str = ""  # Binary banner, e.g. "mysqld  Ver 8.0.34 for Linux"
    version_query: str = ""  # Output of SELECT @@version
    service: str = "MySQL"
    version: str = ""

    @property
    def detected(self) -> bool:
        return bool(self.server_info or self.version_query)


class DatabaseScanner:
    """Scanner for MySQL/MariaDB.

    Collects:
    - Server binary version banner
    - Live server version via the mysql client, when permitted
    """

    VERSION_QUERY = "mysql -N -B -e 'SELECT @@version' 2>/dev/null"

    BANNER_COMMANDS = [
        "mysqld --version 2>/dev/null",
        "mariadbd --version 2>/dev/null",
        "mysql --version 2>/dev/null",
    ]

    def __init__(self, ssh: Connector) -> None:
        self.ssh = ssh

    def scan(self) -> DatabaseScanResult:
        """Perform database scan.

        Returns:
            DatabaseScanResult; fields stay empty when nothing answers.
        """
        result = DatabaseScanResult()

        for command in self.BANNER_COMMANDS:
            banner = self.ssh.run(command, timeout=5)
            if banner.success and banner.output:
                result.server_info = banner.output.splitlines()[0]
                break

        query = self.ssh.run(self.VERSION_QUERY, timeout=5)
        if query.success and query.stdout.strip():
            result.version_query = query.stdout.strip().splitlines()[0]

        result.service = detect_db_service(f"{result.server_info} {result.version_query}")
        result.version = extract_db_version(result.version_query) or extract_db_version(result.server_info)
        return result
