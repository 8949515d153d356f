"""Server facade - The one object the CLI and the dashboard talk to.

Composes the environment reporter, the requirements fetcher and the
status rules. Failures the caller can do nothing about come back as None
rather than exceptions.
"""

import logging
from typing import Any

from wp_supervisor.engine.environment import EnvironmentReporter
from wp_supervisor.engine.requirements import RequirementsFetcher
from wp_supervisor.engine.status import (
    classify,
    is_known_software,
    relevant_software,
    resolve_requirement,
)
from wp_supervisor.model.requirements import Requirements, Status
from wp_supervisor.model.server import ServerData

logger = logging.getLogger(__name__)


class Server:
    """Server data, requirements and up-to-date checks for one site."""

    def __init__(self, environment: EnvironmentReporter, fetcher: RequirementsFetcher) -> None:
        self.environment = environment
        self.fetcher = fetcher

    def get_data(self) -> ServerData:
        return self.environment.get_data()

    def get_ip(self) -> str | None:
        return self.environment.get_ip()

    def get_requirements(self) -> dict[str, Any] | None:
        return self.fetcher.get_requirements()

    def is_updated(self, software: str) -> Status | None:
        """Whether ``software`` is updated, outdated or obsolete.

        Args:
            software: One of php, mysql, mariadb, wp, nginx, apache.

        Returns:
            The status, or None for an unknown key, missing requirements,
            or an installed version that could not be determined.
        """
        if not is_known_software(software):
            logger.debug("Rejected unknown software key %r", software)
            return None

        requirements = self.get_requirements()
        if not requirements:
            return None

        data = self.get_data()
        current = data.version_of(software)
        if not current:
            logger.debug("No installed version known for %s", software)
            return None

        resolved = resolve_requirement(software, Requirements(requirements), installed=current)
        if resolved is None:
            logger.debug("Requirements document has no usable entry for %s", software)
            return None

        recommended, minimum = resolved
        try:
            return classify(current, recommended, minimum)
        except ValueError as e:
            logger.debug("Cannot classify %s: %s", software, e)
            return None

    def statuses(self) -> dict[str, Status | None]:
        """Status of every piece of software this server actually runs."""
        return {software: self.is_updated(software) for software in relevant_software(self.get_data())}
