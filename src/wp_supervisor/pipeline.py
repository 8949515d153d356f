"""Shared wiring from a site profile to a ready Server.

Keeps connector, cache and HTTP session construction out of cli.py so
both the CLI and the web dashboard can reuse it.
Public API:
    open_server(profile, settings) -> context manager yielding Server
    build_server(connector, profile, settings, store) -> Server
    build_fetcher(profile, settings, store) -> RequirementsFetcher
"""

import contextlib
from typing import Iterator

import requests

from wp_supervisor.config import SiteProfile, Settings
from wp_supervisor.connector import Connector, LocalConnector, SSHConnector
from wp_supervisor.engine.environment import EnvironmentReporter
from wp_supervisor.engine.hooks import FilterRegistry
from wp_supervisor.engine.requirements import RequirementsFetcher
from wp_supervisor.engine.server import Server
from wp_supervisor.storage.transients import SqliteTransientStore, TransientStore


def open_connector(profile: SiteProfile) -> Connector:
    """SSH connector for remote profiles, local connector otherwise (not yet connected)."""
    if profile.ssh:
        return SSHConnector(profile.ssh)
    return LocalConnector()


def open_store(settings: Settings) -> TransientStore:
    return SqliteTransientStore(settings.cache_path)


def build_fetcher(
    profile: SiteProfile,
    settings: Settings,
    store: TransientStore,
    *,
    hooks: FilterRegistry | None = None,
    session: requests.Session | None = None,
) -> RequirementsFetcher:
    return RequirementsFetcher(
        store,
        site_url=profile.resolved_site_url,
        api_url=settings.api_url,
        timeout=settings.request_timeout,
        hooks=hooks,
        session=session,
        ttl=settings.requirements_ttl,
    )


def build_server(
    connector: Connector,
    profile: SiteProfile,
    settings: Settings,
    store: TransientStore,
    *,
    hooks: FilterRegistry | None = None,
    session: requests.Session | None = None,
) -> Server:
    """Wire a Server for ``profile`` on an already open connector.

    Server data is cached per profile; the requirements document is shared.
    """
    hooks = hooks or FilterRegistry()
    environment = EnvironmentReporter(
        connector,
        store.scoped(profile.name),
        wp_path=profile.wp_path,
        site_url=profile.resolved_site_url,
        server_software=profile.server_software,
        hooks=hooks,
        session=session,
        ttl=settings.server_data_ttl,
    )
    fetcher = build_fetcher(profile, settings, store, hooks=hooks, session=session)
    return Server(environment, fetcher)


@contextlib.contextmanager
def open_server(
    profile: SiteProfile,
    settings: Settings,
    *,
    store: TransientStore | None = None,
    hooks: FilterRegistry | None = None,
) -> Iterator[Server]:
    """Connect to the profile's host and yield a Server; disconnects on exit.

    Raises:
        ConnectionError: If the SSH connection cannot be established.
    """
    store = store or open_store(settings)
    with requests.Session() as session, open_connector(profile) as connector:
        yield build_server(connector, profile, settings, store, hooks=hooks, session=session)
