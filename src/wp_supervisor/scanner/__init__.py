"""Scanner package - Data collection from WordPress hosts.

Scanners run shell commands and collect raw strings.
They do NOT interpret versions - that's the parser's job.
"""

from wp_supervisor.scanner.database import DatabaseScanner
from wp_supervisor.scanner.php import PHPScanner
from wp_supervisor.scanner.web import WebServerScanner
from wp_supervisor.scanner.wordpress import WordPressScanner

__all__ = [
    "DatabaseScanner",
    "PHPScanner",
    "WebServerScanner",
    "WordPressScanner",
]
