"""WordPress Scanner - Reads the core version from the install."""

import posixpath
from dataclasses import dataclass

from wp_supervisor.connector import Connector
from wp_supervisor.parser.versions import extract_wp_version


@dataclass
class WordPressScanResult:
    """Raw WordPress scan results."""

    installed: bool = False
    version_file: str = ""
    version: str = ""


class WordPressScanner:
    """Scanner for the WordPress core version.

    WordPress records its version in ``wp-includes/version.php``;
    reading that file needs neither WP-CLI nor a database connection.
    """

    VERSION_FILE = "wp-includes/version.php"

    def __init__(self, ssh: Connector, wp_path: str = "/var/www/html") -> None:
        self.ssh = ssh
        self.wp_path = wp_path

    def scan(self) -> WordPressScanResult:
        version_file = posixpath.join(self.wp_path, self.VERSION_FILE)
        result = WordPressScanResult(version_file=version_file)

        content = self.ssh.read_file(version_file)
        if content is None:
            return result

        result.installed = True
        result.version = extract_wp_version(content)
        return result
