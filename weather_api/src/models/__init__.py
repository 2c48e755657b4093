"""Data models for the weather service.

This package contains Pydantic models for the upstream wire format and the
domain values derived from it.
"""

from weather_api.src.models.weather import (
    ClassificationResult,
    Coordinate,
    OpenWeatherResponse,
    TemperatureLabel,
    WeatherObservation,
)

__all__ = [
    "ClassificationResult",
    "Coordinate",
    "OpenWeatherResponse",
    "TemperatureLabel",
    "WeatherObservation",
]
