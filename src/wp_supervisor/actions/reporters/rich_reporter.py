"""Rich Reporter Implementation."""

from typing import Any

from rich.panel import Panel
from rich.table import Table

from wp_supervisor.actions.reporters.base import BaseReporter
from wp_supervisor.model.requirements import Status
from wp_supervisor.model.server import ServerData

_STATUS_STYLE = {
    Status.UPDATED: ("green", "✓"),
    Status.OUTDATED: ("yellow", "!"),
    Status.OBSOLETE: ("red", "x"),
}


class RichReporter(BaseReporter):
    """Generates high-fidelity terminal output using Rich."""

    def report_server(self, data: ServerData, ip: str | None = None) -> None:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="dim")
        grid.add_column()

        if ip:
            grid.add_row("IP", ip)
        grid.add_row("PHP", data.php or "[dim]unknown[/]")
        grid.add_row("Database", f"{data.database.service} {data.database.version or '[dim]unknown[/]'}")
        if data.web:
            grid.add_row("Web server", f"{data.web.service} {data.web.version or '[dim]unknown[/]'}")
        else:
            grid.add_row("Web server", "[dim]unknown[/]")
        grid.add_row("WordPress", data.wp or "[dim]unknown[/]")

        self.console.print(Panel(grid, title="[bold]Server Software[/]", border_style="blue", expand=False))

    def report_statuses(self, statuses: dict[str, Status | None]) -> int:
        table = Table(title="Software Status", show_header=True, header_style="bold")
        table.add_column("Software")
        table.add_column("Status")

        for software, status in statuses.items():
            if status is None:
                table.add_row(software, "[dim]? unknown[/]")
                continue
            color, icon = _STATUS_STYLE[status]
            table.add_row(software, f"[{color}]{icon} {status.value}[/]")

        self.console.print(table)
        return self.exit_code(statuses)

    def report_requirements(self, requirements: dict[str, Any] | None) -> int:
        if not requirements:
            self.console.print("[red]Requirements unavailable[/] [dim](API unreachable or returned an error)[/]")
            return 1

        table = Table(title="Requirements", show_header=True, header_style="bold")
        table.add_column("Software")
        table.add_column("Recommended")
        table.add_column("Minimum")

        for software, entry in requirements.items():
            if isinstance(entry, dict):
                oldest = entry.get("minimum") or (entry.get("versions") or ["-"])[-1]
                table.add_row(software, str(entry.get("recommended", "-")), str(oldest))
            elif isinstance(entry, list) and entry:
                table.add_row(software, str(entry[0]), str(entry[-1]))

        self.console.print(table)
        return 0
