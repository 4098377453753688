"""FastAPI application entry point with lifespan management.

Startup: load settings, configure logging, build the extractor registry
(platform extractors first, manual fallback last), launch the browser
session and pick the host messaging channel.
Shutdown: close the browser session.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from job_extractor.browser.session import BrowserSession
from job_extractor.config.settings import ExtractorSettings
from job_extractor.content.channel import (
    HttpMessageChannel,
    MessageChannel,
    NullMessageChannel,
)
from job_extractor.extractors.registry import default_registry
from job_extractor.logging_config import configure_logging
from job_extractor.middleware.error_handler import register_error_handlers
from job_extractor.middleware.request_id import RequestIdMiddleware
from job_extractor.routers.extract import create_extract_router
from job_extractor.routers.health import create_health_router

logger = logging.getLogger(__name__)


def build_channel(settings: ExtractorSettings) -> MessageChannel:
    """Return the messaging channel configured by *settings*."""
    if settings.ready_callback_url:
        return HttpMessageChannel(
            settings.ready_callback_url,
            timeout_seconds=settings.callback_timeout_seconds,
        )
    return NullMessageChannel()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    settings: ExtractorSettings = app.state.settings

    configure_logging(settings.log_level)
    logger.info("Starting job extraction service on port %d", settings.port)

    registry = default_registry(settings.content_timeout_ms)

    browser_session = BrowserSession(
        headless=settings.headless,
        navigation_timeout_ms=settings.navigation_timeout_ms,
    )
    await browser_session.start()

    # Mount routers
    app.include_router(
        create_health_router(registry=registry, browser_session=browser_session)
    )
    app.include_router(
        create_extract_router(
            registry=registry,
            browser_session=browser_session,
            channel=build_channel(settings),
        )
    )

    logger.info("Job extraction service started successfully")

    yield

    # --- Shutdown ---
    logger.info("Shutting down job extraction service…")
    await browser_session.shutdown()
    logger.info("Job extraction service shut down")


def create_app(settings: ExtractorSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or ExtractorSettings()

    app = FastAPI(
        title="Job Extraction Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    return app


app = create_app()
