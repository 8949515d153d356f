"""Model package - Core data structures for wp-supervisor."""

from wp_supervisor.model.requirements import Requirements, SoftwareRequirement, Status
from wp_supervisor.model.server import DatabaseInfo, ServerData, WebServerInfo

__all__ = [
    "DatabaseInfo",
    "Requirements",
    "ServerData",
    "SoftwareRequirement",
    "Status",
    "WebServerInfo",
]
