"""
Weather lookup router.

Provides:
- GET /weather?lat=&lon= : current conditions with a Hot/Cold/Moderate label

The handler checks the API key first, then latitude, then longitude, and
only then calls the weather provider. Failures are raised as
WeatherServiceError subclasses and rendered by the application's exception
handler.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from weather_api.src.dependencies import get_metrics, get_raw_api_key, get_weather_client
from weather_api.src.models.weather import ClassificationResult, Coordinate, WeatherObservation
from weather_api.src.services.classifier import classify
from weather_api.src.services.credentials import get_api_key
from weather_api.src.services.validation import validate_latitude, validate_longitude
from weather_api.src.services.weather_client import WeatherClient
from shared.metrics import WeatherServiceMetrics

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Weather"])


def format_weather_report(
    observation: WeatherObservation, result: ClassificationResult
) -> str:
    """Render the plain-text body returned by /weather."""
    return (
        "Current Temperature:\n"
        f"  Weather     : {observation.description}\n"
        f"  Temperature : {result.describe()}"
    )


@router.get(
    "/weather",
    response_class=PlainTextResponse,
    summary="Current weather",
    responses={
        400: {"description": "Invalid latitude or longitude"},
        500: {"description": "Invalid API key or upstream provider error"},
    },
)
async def get_weather(
    lat: Optional[str] = Query(None, description="Latitude in degrees, -90 to 90"),
    lon: Optional[str] = Query(None, description="Longitude in degrees, -180 to 180"),
    raw_api_key: Optional[str] = Depends(get_raw_api_key),
    client: WeatherClient = Depends(get_weather_client),
    metrics: Optional[WeatherServiceMetrics] = Depends(get_metrics),
) -> PlainTextResponse:
    """
    Look up current conditions for a coordinate.

    Returns a three-line text summary: a header, the provider's condition
    description, and the classified temperature in Fahrenheit and Celsius.
    """
    api_key = get_api_key(raw_api_key)
    coordinate = Coordinate(latitude=validate_latitude(lat), longitude=validate_longitude(lon))

    observation = await client.fetch_weather(coordinate, api_key)
    result = classify(observation.temperature_celsius)

    if metrics is not None:
        metrics.classifications.labels(label=result.label.value).inc()

    logger.info(
        "weather_lookup_completed",
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
        label=result.label.value,
        temperature_celsius=observation.temperature_celsius,
    )

    return PlainTextResponse(format_weather_report(observation, result))
