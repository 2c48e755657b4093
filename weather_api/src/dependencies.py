"""
FastAPI dependency injection for credentials, metrics and the weather client.

Everything a request needs is created once in the application lifespan and
stored on ``app.state``; these dependencies only hand it out, which keeps
handlers free of environment lookups and lets tests override any of them.
"""

from typing import Optional

import structlog
from fastapi import Request

from weather_api.src.services.weather_client import WeatherClient
from shared.metrics import WeatherServiceMetrics

logger = structlog.get_logger(__name__)


def get_raw_api_key(request: Request) -> Optional[str]:
    """Raw API key captured at startup (validated per request)."""
    return getattr(request.app.state, "raw_api_key", None)


def get_weather_client(request: Request) -> WeatherClient:
    """
    Get the shared weather client.

    Raises:
        RuntimeError: If called before the application lifespan started
    """
    client = getattr(request.app.state, "weather_client", None)
    if client is None:
        logger.error("weather_client_not_initialized")
        raise RuntimeError(
            "Weather client not initialized. It is created during application startup."
        )
    return client


def get_metrics(request: Request) -> Optional[WeatherServiceMetrics]:
    """Application metrics, or None when metrics are disabled."""
    return getattr(request.app.state, "metrics", None)
