"""SSH Connector - Runs inspection commands on a remote WordPress host.

Only reads: version banners, ``wp-includes/version.php`` and the host
address. Nothing here changes the server.
"""

import shlex
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import paramiko
from paramiko.ssh_exception import AuthenticationException, SSHException


@dataclass
class SSHConfig:
    """How to log in to the host a site runs on."""

    host: str
    user: str = "root"
    port: int = 22
    key_path: str | None = None
    password: str | None = None  # Used when no key is given, and for sudo -S
    use_sudo: bool = True
    timeout: int = 30


@dataclass
class CommandResult:
    """Outcome of one shell command."""

    command: str
    stdout: str
    stderr: str
    exit_code: int
    success: bool = field(init=False)

    def __post_init__(self) -> None:
        self.success = self.exit_code == 0

    @property
    def output(self) -> str:
        """stdout, or stderr when stdout is empty (``nginx -v`` writes there)."""
        return (self.stdout or self.stderr).strip()


class SSHConnector:
    """Paramiko session to one host.

    Example:
        >>> with SSHConnector(SSHConfig(host="203.0.113.20", user="deploy")) as ssh:
        ...     ssh.run("php -v").output
        'PHP 8.2.10 (cli) ...'
    """

    def __init__(self, config: SSHConfig) -> None:
        self.config = config
        self._client: paramiko.SSHClient | None = None

    def __enter__(self) -> "SSHConnector":
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        self.disconnect()

    def connect(self) -> None:
        """Open the session.

        Raises:
            ConnectionError: If authentication or the SSH handshake fails.
        """
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(**self._connect_kwargs())
        except AuthenticationException as e:
            raise ConnectionError(f"Authentication failed for {self.config.user}@{self.config.host}: {e}") from e
        except SSHException as e:
            raise ConnectionError(f"SSH error: {e}") from e
        self._client = client

    def disconnect(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _connect_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "hostname": self.config.host,
            "port": self.config.port,
            "username": self.config.user,
            "timeout": self.config.timeout,
        }
        # A configured key wins over the password
        if self.config.key_path:
            key_file = Path(self.config.key_path).expanduser()
            if key_file.exists():
                kwargs["key_filename"] = str(key_file)
        elif self.config.password:
            kwargs["password"] = self.config.password
        return kwargs

    def _with_sudo(self, command: str) -> str:
        if self.config.user == "root":
            return command
        if self.config.password:
            return f"echo {shlex.quote(self.config.password)} | sudo -S {command}"
        return f"sudo {command}"

    def run(self, command: str, use_sudo: bool | None = None, timeout: float | None = None) -> CommandResult:
        """Run ``command`` on the host.

        Args:
            command: Shell command line.
            use_sudo: Override the profile's sudo setting for this command.
            timeout: Seconds to wait; the profile timeout when omitted.

        Returns:
            CommandResult. Transport failures come back as exit code 255.
        """
        if not self._client:
            raise RuntimeError("Not connected. Use 'with SSHConnector(config):' context.")

        if self.config.use_sudo if use_sudo is None else use_sudo:
            command = self._with_sudo(command)

        try:
            _, stdout, stderr = self._client.exec_command(
                command,
                timeout=timeout if timeout is not None else self.config.timeout,
            )
            exit_code = stdout.channel.recv_exit_status()
            out = stdout.read().decode("utf-8", errors="replace")
            err = stderr.read().decode("utf-8", errors="replace")
        except (SSHException, OSError) as e:
            return CommandResult(command=command, stdout="", stderr=f"SSH Execution Error: {e}", exit_code=255)

        return CommandResult(command=command, stdout=out, stderr=err, exit_code=exit_code)

    def read_file(self, path: str) -> str | None:
        """Contents of ``path``, or None when it cannot be read."""
        result = self.run(f"cat {shlex.quote(path)}", use_sudo=True)
        return result.stdout if result.success else None

    def file_exists(self, path: str) -> bool:
        return self.run(f"test -f {shlex.quote(path)}", use_sudo=True).success

    def server_address(self) -> str | None:
        """The configured host name resolved to an address."""
        try:
            return socket.gethostbyname(self.config.host)
        except OSError:
            return None
