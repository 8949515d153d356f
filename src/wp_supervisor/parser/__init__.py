"""Parser package - Converts raw environment strings into typed values.

Parsers do NOT run commands - they structure data from scanners.
"""

from wp_supervisor.parser.versions import (
    Version,
    compare_versions,
    detect_db_service,
    extract_db_version,
    extract_php_version,
    extract_wp_version,
    major_minor,
    parse_server_software,
)

__all__ = [
    "Version",
    "compare_versions",
    "detect_db_service",
    "extract_db_version",
    "extract_php_version",
    "extract_wp_version",
    "major_minor",
    "parse_server_software",
]
