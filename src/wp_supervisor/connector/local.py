"""Local Connector - Inspect the host wp-supervisor runs on.

Mirrors the SSH connector surface on top of ``subprocess`` so a
WordPress host can report on itself without an SSH hop.
"""

import socket
import subprocess
from pathlib import Path

from wp_supervisor.connector.ssh import CommandResult


class LocalConnector:
    """Run commands and read files on the local machine."""

    def __init__(self, timeout: int = 30) -> None:
        self.timeout = timeout

    def __enter__(self) -> "LocalConnector":
        return self

    def __exit__(self, *args: object) -> None:
        pass

    def run(self, command: str, use_sudo: bool | None = None, timeout: float | None = None) -> CommandResult:
        """Execute a shell command locally. ``use_sudo`` is accepted and ignored."""
        cmd_timeout = timeout if timeout is not None else self.timeout
        try:
            proc = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                timeout=cmd_timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            return CommandResult(command=command, stdout="", stderr=str(e), exit_code=255)

        return CommandResult(
            command=command,
            stdout=proc.stdout,
            stderr=proc.stderr,
            exit_code=proc.returncode,
        )

    def read_file(self, path: str) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def server_address(self) -> str | None:
        """Address of this machine's hostname."""
        try:
            return socket.gethostbyname(socket.gethostname())
        except OSError:
            return None
