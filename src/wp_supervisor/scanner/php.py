"""PHP Scanner - Collects the interpreter version string."""

from dataclasses import dataclass

from wp_supervisor.connector import Connector
from wp_supervisor.parser.versions import extract_php_version


@dataclass
class PHPScanResult:
    """Raw PHP scan results."""

    installed: bool = False
    raw: str = ""  # First line of `php -v`
    version: str = ""


class PHPScanner:
    """Scanner for the PHP interpreter serving WordPress."""

    # Tried in order, first answer wins
    PHP_BINARIES = [
        "php",
        "/usr/local/bin/php",
    ]

    def __init__(self, ssh: Connector) -> None:
        self.ssh = ssh

    def scan(self) -> PHPScanResult:
        """Perform PHP scan.

        Returns:
            PHPScanResult with the version banner and parsed version.
        """
        result = PHPScanResult()

        for binary in self.PHP_BINARIES:
            version_result = self.ssh.run(f"{binary} -v", timeout=10)
            if not version_result.success or not version_result.stdout.strip():
                continue

            # "PHP 8.2.10 (cli) (built: ...)"
            result.installed = True
            result.raw = version_result.stdout.strip().splitlines()[0]
            result.version = extract_php_version(result.raw)
            break

        return result
