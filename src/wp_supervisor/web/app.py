"""
FastAPI application for the wp-supervisor dashboard.

Serves the same data the CLI prints as JSON for an admin panel to poll.
Runs on localhost by default; set an admin token before exposing it.
"""

import logging
from typing import Callable, ContextManager

from fastapi import FastAPI

from wp_supervisor import __version__
from wp_supervisor.config import Settings, SiteProfile
from wp_supervisor.engine.server import Server
from wp_supervisor.pipeline import open_server, open_store
from wp_supervisor.web.routes import server as server_route

logger = logging.getLogger(__name__)

ServerFactory = Callable[[], ContextManager[Server]]


def create_app(settings: Settings, server_factory: ServerFactory) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Global settings (the admin token is read from here).
        server_factory: Returns a context manager yielding a Server; called
            once per request.
    """
    app = FastAPI(
        title="wp-supervisor",
        description="Server software versions and requirement status for a WordPress site",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.server_factory = server_factory

    app.include_router(server_route.router, prefix="/api", tags=["server"])

    return app


def create_site_app(profile: SiteProfile, settings: Settings) -> FastAPI:
    """Dashboard for one site profile, sharing one cache across requests."""
    store = open_store(settings)

    def factory() -> ContextManager[Server]:
        return open_server(profile, settings, store=store)

    return create_app(settings, factory)


def run_server(profile: SiteProfile, settings: Settings, host: str = "127.0.0.1", port: int = 8765) -> None:
    """Run the dashboard with uvicorn."""
    import uvicorn

    if host != "127.0.0.1" and not settings.admin_token:
        logger.warning("Serving on %s without an admin token; anyone who can reach it can read server details", host)

    uvicorn.run(create_site_app(profile, settings), host=host, port=port, log_level="info")
