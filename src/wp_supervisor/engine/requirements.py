"""Requirements Fetcher - Minimum and recommended versions from the API.

One GET per cache window. Any failure (transport error, non-200 status,
a body that is not a JSON object) means "no requirements" and nothing is
cached, so the next call tries again.
"""

import logging
from typing import Any

import requests

from wp_supervisor import __version__
from wp_supervisor.engine.hooks import SERVER_REQUIREMENTS_FILTER, FilterRegistry
from wp_supervisor.storage.transients import WEEK_IN_SECONDS, TransientStore

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.supervisorwp.com/v1/requirements"
DEFAULT_TIMEOUT = 20


class RequirementsFetcher:
    """Fetches and caches the requirements document."""

    MIN_REQUIREMENTS_TRANSIENT = "supv_server_min_requirements"

    def __init__(
        self,
        store: TransientStore,
        *,
        site_url: str = "",
        api_url: str = DEFAULT_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        hooks: FilterRegistry | None = None,
        session: requests.Session | None = None,
        ttl: int = WEEK_IN_SECONDS,
    ) -> None:
        self.store = store
        self.site_url = site_url
        self.api_url = api_url
        self.timeout = timeout
        self.hooks = hooks or FilterRegistry()
        self.session = session or requests.Session()
        self.ttl = ttl

    @property
    def user_agent(self) -> str:
        return f"Supervisor/{__version__}; {self.site_url}"

    def get_requirements(self) -> dict[str, Any] | None:
        """The requirements document, or None when it cannot be obtained."""
        requirements = self.store.get(self.MIN_REQUIREMENTS_TRANSIENT)

        if requirements is None:
            requirements = self.fetch()
            if requirements is not None:
                self.store.set(self.MIN_REQUIREMENTS_TRANSIENT, requirements, self.ttl)

        return self.hooks.apply_filters(SERVER_REQUIREMENTS_FILTER, requirements)

    def flush(self) -> bool:
        """Forget the cached requirements document."""
        return self.store.delete(self.MIN_REQUIREMENTS_TRANSIENT)

    def fetch(self) -> dict[str, Any] | None:
        """Call the API once, bypassing the cache."""
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

        try:
            response = self.session.get(self.api_url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Requirements request to %s failed: %s", self.api_url, e)
            return None

        if response.status_code != 200:
            logger.warning("Requirements API answered HTTP %s", response.status_code)
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Requirements API returned invalid JSON: %s", e)
            return None

        if not isinstance(data, dict) or not data:
            logger.warning("Requirements API returned an unexpected document")
            return None

        return data
