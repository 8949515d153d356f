"""Pytest configuration and fixtures for wp-supervisor tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from wp_supervisor.connector.ssh import CommandResult
from wp_supervisor.scanner.database import DatabaseScanner
from wp_supervisor.storage.transients import MemoryTransientStore


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeConnector:
    """Connector answering from canned command output and files.

    Unknown commands fail with exit code 127 like a missing binary.
    """

    def __init__(self, commands=None, files=None, address=None) -> None:
        self.commands = commands or {}
        self.files = files or {}
        self.address = address
        self.calls: list[str] = []

    def run(self, command, use_sudo=None, timeout=None):
        self.calls.append(command)
        if command not in self.commands:
            return CommandResult(command=command, stdout="", stderr="command not found", exit_code=127)
        stdout, stderr, exit_code = self.commands[command]
        return CommandResult(command=command, stdout=stdout, stderr=stderr, exit_code=exit_code)

    def read_file(self, path):
        self.calls.append(f"read {path}")
        return self.files.get(path)

    def file_exists(self, path):
        return path in self.files

    def server_address(self):
        return self.address


WP_VERSION_PHP = """<?php
/**
 * WordPress Version
 */
$wp_version = '6.4.3';
$wp_db_version = 56657;
$tinymce_version = '49110-20201110';
$required_php_version = '7.0.0';
"""

SAMPLE_REQUIREMENTS = {
    "php": {"recommended": "8.3", "minimum": "7.4"},
    "mysql": {"recommended": "8.0", "minimum": "5.7"},
    "mariadb": {"recommended": "11.4", "minimum": "10.4"},
    "nginx": {"recommended": "1.26.1", "versions": ["1.26.1", "1.24.0", "1.22.1", "1.20.2"]},
    "apache": {"recommended": "2.4.62", "versions": ["2.4.62", "2.4.58", "2.4.52", "2.4.41"]},
    "wordpress": ["6.6.1", "6.5.5", "6.4.5", "6.3.5", "6.2.6", "4.1.40"],
}


def lemp_connector() -> FakeConnector:
    """Ubuntu host running nginx, PHP-FPM 8.1 and MySQL 8.0 with WordPress 6.4.3."""
    return FakeConnector(
        commands={
            "php -v": ("PHP 8.1.2-1ubuntu2.14 (cli) (built: Aug 18 2023 11:41:11) (NTS)\nCopyright (c) The PHP Group\n", "", 0),
            "mysqld --version 2>/dev/null": ("/usr/sbin/mysqld  Ver 8.0.34-0ubuntu0.22.04.1 for Linux on x86_64 ((Ubuntu))\n", "", 0),
            DatabaseScanner.VERSION_QUERY: ("8.0.34-0ubuntu0.22.04.1\n", "", 0),
            "nginx -v": ("", "nginx version: nginx/1.24.0 (Ubuntu)\n", 0),
            "hostname -I": ("10.0.0.5 172.17.0.1 \n", "", 0),
        },
        files={"/var/www/html/wp-includes/version.php": WP_VERSION_PHP},
        address="10.0.0.5",
    )


def json_response(data, status_code: int = 200):
    def _json():
        if isinstance(data, Exception):
            raise data
        return data

    return SimpleNamespace(status_code=status_code, json=_json, headers={})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryTransientStore(clock=clock)


@pytest.fixture
def connector():
    return lemp_connector()


@pytest.fixture
def requirements_doc():
    return {k: (v.copy() if isinstance(v, (dict, list)) else v) for k, v in SAMPLE_REQUIREMENTS.items()}


@pytest.fixture
def http_session(requirements_doc):
    """requests.Session stand-in whose GET returns the sample requirements."""
    session = MagicMock()
    session.get.return_value = json_response(requirements_doc)
    session.head.return_value = SimpleNamespace(status_code=200, headers={})
    return session
