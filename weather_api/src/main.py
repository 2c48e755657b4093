"""
FastAPI application entry point for the weather service.

This module provides:
- The application factory wiring routers, middleware and exception handlers
- Lifespan management for the shared HTTP session and the API key
- The Prometheus metrics endpoint
- The ``weather-service`` console entry point running uvicorn
"""

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import aiohttp
import structlog
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from prometheus_client import CONTENT_TYPE_LATEST

from weather_api.src import __version__
from weather_api.src.config import Settings, get_http_listen_address, get_settings
from weather_api.src.exceptions import ConfigurationError, WeatherServiceError
from weather_api.src.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from weather_api.src.routers import health, weather
from weather_api.src.services.credentials import load_raw_api_key
from weather_api.src.services.weather_client import WeatherClient
from shared.logging import configure_logging
from shared.metrics import WeatherServiceMetrics, get_metrics_handler

logger = structlog.get_logger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - Resolving the raw API key (environment or Vault)
    - Opening the aiohttp session used for the weather provider
    - Closing the session on shutdown
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    app.state.raw_api_key = load_raw_api_key(settings)
    if not app.state.raw_api_key:
        logger.warning("api_key_not_configured")

    session = aiohttp.ClientSession()
    app.state.weather_client = WeatherClient(
        session=session,
        base_url=settings.openweather_base_url,
        timeout_seconds=settings.upstream_timeout_seconds,
        metrics=app.state.metrics,
    )

    logger.info("application_started", upstream=settings.openweather_base_url)

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        await session.close()
        app.state.weather_client = None
        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def weather_service_exception_handler(
    request: Request, exc: WeatherServiceError
) -> PlainTextResponse:
    """Render a domain error as a short plain-text message."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_rejected",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Last-resort handler for exceptions escaping the request middleware."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return PlainTextResponse(
        "Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# ============================================================================
# FastAPI Application
# ============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached process settings

    Returns:
        Configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Current weather lookup with a Hot/Cold/Moderate classification.",
        lifespan=lifespan,
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
    )
    app.state.settings = settings
    app.state.metrics = WeatherServiceMetrics() if settings.metrics_enabled else None

    if settings.security_headers_enabled:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, metrics=app.state.metrics)

    app.add_exception_handler(WeatherServiceError, weather_service_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router)
    app.include_router(weather.router)

    if app.state.metrics is not None:
        render_metrics = get_metrics_handler(app.state.metrics)

        @app.get("/metrics", tags=["Monitoring"], include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=render_metrics(), media_type=CONTENT_TYPE_LATEST)

    return app


# ============================================================================
# Application Entry Point
# ============================================================================

def run() -> None:
    """
    Validate startup configuration and serve the application with uvicorn.

    Exits with status 1 if the settings or the listen address are invalid.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(service_name="weather-service")
        logger.critical("invalid_settings", errors=e.errors(include_url=False, include_input=False))
        sys.exit(1)

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment,
    )

    try:
        listen_address = get_http_listen_address(settings)
    except ConfigurationError as e:
        logger.critical("invalid_listen_address", error=str(e))
        sys.exit(1)

    logger.info(
        "starting_uvicorn_server",
        listen_address=str(listen_address),
        version=__version__,
    )

    uvicorn.run(
        create_app(settings),
        host=listen_address.host,
        port=listen_address.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
