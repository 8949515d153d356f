"""Engine package - Caching, requirements and status logic."""

from wp_supervisor.engine.environment import EnvironmentReporter
from wp_supervisor.engine.hooks import FilterRegistry
from wp_supervisor.engine.requirements import RequirementsFetcher
from wp_supervisor.engine.server import Server
from wp_supervisor.engine.status import SOFTWARE_KEYS, classify

__all__ = [
    "EnvironmentReporter",
    "FilterRegistry",
    "RequirementsFetcher",
    "SOFTWARE_KEYS",
    "Server",
    "classify",
]
