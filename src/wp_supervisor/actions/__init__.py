"""Actions package - Read-only output of collected data."""

from rich.console import Console

from wp_supervisor.actions.reporters.base import BaseReporter
from wp_supervisor.actions.reporters.json_reporter import JsonReporter
from wp_supervisor.actions.reporters.plain_reporter import PlainReporter
from wp_supervisor.actions.reporters.rich_reporter import RichReporter

REPORTERS: dict[str, type[BaseReporter]] = {
    "rich": RichReporter,
    "plain": PlainReporter,
    "json": JsonReporter,
}


def get_reporter(fmt: str, console: Console) -> BaseReporter:
    """Reporter for an output format name (rich, plain, json)."""
    return REPORTERS[fmt](console)


__all__ = ["BaseReporter", "JsonReporter", "PlainReporter", "REPORTERS", "RichReporter", "get_reporter"]
