"""FastAPI application factory.

Creates the application with its CORS middleware, exception handlers and
routers. Shared upstream clients are built in the lifespan and closed on
shutdown.

Run with uvicorn's factory mode:
    uvicorn smogmap.api.app:create_app --factory
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smogmap import __version__
from smogmap.api.exception_handlers import setup_exception_handlers
from smogmap.api.routers import cities, health
from smogmap.shared import SharedInfrastructure
from smogmap_config import Settings, get_settings


@lru_cache(maxsize=1)
def configure_logging(log_level_name: str = "INFO") -> None:
    """Configure application logging.

    Console output with timestamps and module names, the configured level
    for smogmap modules and WARNING for noisy HTTP libraries.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("smogmap").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def _log_settings(settings: Settings) -> None:
    """Log current settings for debugging."""
    logger.info("=" * 60)
    logger.info("smogmap %s configuration", __version__)
    logger.info("=" * 60)
    logger.info("  Log level: %s", settings.log_level)
    logger.info("  Pollution API: %s (user %s)", settings.api_base_url, settings.api_username)
    logger.info("  Lookup API: %s", settings.lookup_base_url)
    logger.info("  Cache:")
    logger.info("    TTL: %ds", settings.cache_ttl)
    logger.info("    Max size: %s", settings.cache_max_size or "unbounded")
    logger.info("  Batch size: %d", settings.enrichment_batch_size)
    logger.info("  HTTP timeout: %s", settings.http_timeout or "none")
    logger.info("  CORS origins: %s", ", ".join(settings.cors_origins) or "none")
    logger.info("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create shared upstream clients at startup, close them at shutdown."""
    settings: Settings = app.state.settings
    _log_settings(settings)

    app.state.infra = SharedInfrastructure.create(settings)
    logger.info("smogmap API ready")
    yield

    logger.info("Shutting down")
    await app.state.infra.aclose()
    del app.state.infra


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)

    app = FastAPI(
        title="smogmap API",
        description="Pollution-monitored cities enriched with Wikipedia summaries.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    setup_exception_handlers(app)

    app.include_router(cities.router, tags=["Cities"])
    app.include_router(health.router, tags=["Health"])

    return app
