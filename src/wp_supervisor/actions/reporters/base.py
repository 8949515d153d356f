"""Base Reporter Interface."""

from abc import ABC, abstractmethod
from typing import Any

from rich.console import Console

from wp_supervisor.model.requirements import Status
from wp_supervisor.model.server import ServerData


class BaseReporter(ABC):
    """Abstract base class for all reporters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def report_server(self, data: ServerData, ip: str | None = None) -> None:
        """Display the server software summary."""
        pass

    @abstractmethod
    def report_statuses(self, statuses: dict[str, Status | None]) -> int:
        """Display status per software. Returns the exit code."""
        pass

    @abstractmethod
    def report_requirements(self, requirements: dict[str, Any] | None) -> int:
        """Display the requirements document. Returns the exit code."""
        pass

    @staticmethod
    def exit_code(statuses: dict[str, Status | None]) -> int:
        """1 when anything is obsolete or unknown, else 0."""
        return 1 if any(s in (None, Status.OBSOLETE) for s in statuses.values()) else 0
