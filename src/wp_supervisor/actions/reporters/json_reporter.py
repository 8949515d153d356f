"""JSON Reporter Implementation."""

import json
from typing import Any

from wp_supervisor.actions.reporters.base import BaseReporter
from wp_supervisor.model.requirements import Status
from wp_supervisor.model.server import ServerData


class JsonReporter(BaseReporter):
    """Generates machine-readable JSON output."""

    def _dump(self, data: Any) -> None:
        # soft_wrap stops rich breaking long string values across lines
        self.console.print(
            json.dumps(data, indent=2, default=str),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def report_server(self, data: ServerData, ip: str | None = None) -> None:
        payload = data.to_dict()
        payload["ip"] = ip
        self._dump(payload)

    def report_statuses(self, statuses: dict[str, Status | None]) -> int:
        self._dump({software: status.value if status else None for software, status in statuses.items()})
        return self.exit_code(statuses)

    def report_requirements(self, requirements: dict[str, Any] | None) -> int:
        self._dump(requirements)
        return 0 if requirements else 1
