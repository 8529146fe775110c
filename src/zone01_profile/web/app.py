"""
FastAPI application for Zone01 Profile Dashboard.

PURPOSE: Application factory and server runner.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ..__version__ import __version__
from ..config import Config
from .routes import router

__all__ = ["create_app", "run_dashboard"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # noqa: ARG001
    """Log dashboard startup and shutdown. Nothing is opened or closed here."""
    # Startup
    logger.info("Zone01 profile dashboard starting (v%s)", __version__)
    logger.info("Querying %s for event path %s", Config.GRAPHQL_URL, Config.EVENT_PATH)
    yield
    # Shutdown
    logger.info("Zone01 profile dashboard shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI dashboard application.

    Factory function so tests can build a fresh app and override its
    dependencies (session store, HTTP client).

    Returns:
        FastAPI application with all dashboard routes registered
        (/, /login, /logout, /charts/xp.png, /api/profile) and OpenAPI
        documentation at /docs.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> client = TestClient(create_app())
        >>> client.get('/').status_code
        200
    """
    app = FastAPI(
        title="Zone01 Profile",
        description="Profile statistics dashboard for Zone01 students",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(router)

    return app


def run_dashboard(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """
    Launch the profile dashboard server.

    Starts a uvicorn ASGI server hosting the FastAPI application. Blocks
    until the server is stopped (Ctrl+C).

    Args:
        host: Network interface to bind. '127.0.0.1' keeps the dashboard
            reachable from this machine only.
        port: TCP port number for the HTTP server. Default 8000.
        reload: Restart the server when source files change.
        log_level: Uvicorn log level name, "info" by default.

    Raises:
        OSError: If the address cannot be bound.

    Example:
        >>> run_dashboard(port=8765)  # blocks; open http://127.0.0.1:8765
    """
    uvicorn.run(
        "zone01_profile.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

