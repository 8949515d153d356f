"""Plain Text Reporter Implementation."""

from typing import Any

from wp_supervisor.actions.reporters.base import BaseReporter
from wp_supervisor.model.requirements import Status
from wp_supervisor.model.server import ServerData


class PlainReporter(BaseReporter):
    """Generates clean, text-only output."""

    def _print(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def report_server(self, data: ServerData, ip: str | None = None) -> None:
        self._print("SERVER SOFTWARE")
        if ip:
            self._print(f"IP: {ip}")
        self._print(f"PHP: {data.php or 'unknown'}")
        self._print(f"Database: {data.database.service} {data.database.version or 'unknown'}")
        if data.web:
            self._print(f"Web server: {data.web.service} {data.web.version or 'unknown'}")
        else:
            self._print("Web server: unknown")
        self._print(f"WordPress: {data.wp or 'unknown'}")

    def report_statuses(self, statuses: dict[str, Status | None]) -> int:
        self._print("SOFTWARE STATUS")
        for software, status in statuses.items():
            label = status.value.upper() if status else "UNKNOWN"
            self._print(f"[{label}] {software}")
        return self.exit_code(statuses)

    def report_requirements(self, requirements: dict[str, Any] | None) -> int:
        if not requirements:
            self._print("Requirements unavailable")
            return 1

        self._print("REQUIREMENTS")
        for software, entry in requirements.items():
            if isinstance(entry, dict):
                oldest = entry.get("minimum") or (entry.get("versions") or [None])[-1]
                self._print(f"{software}: recommended={entry.get('recommended')} minimum={oldest}")
            elif isinstance(entry, list) and entry:
                self._print(f"{software}: newest={entry[0]} oldest={entry[-1]}")
        return 0
