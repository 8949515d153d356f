"""Connector package - Run commands on the inspected host.

Both connectors share the same small surface (``run``, ``read_file``,
``file_exists``, ``server_address``) so scanners never care where they run.
"""

from wp_supervisor.connector.local import LocalConnector
from wp_supervisor.connector.ssh import CommandResult, SSHConfig, SSHConnector

Connector = SSHConnector | LocalConnector

__all__ = ["CommandResult", "Connector", "LocalConnector", "SSHConfig", "SSHConnector"]
