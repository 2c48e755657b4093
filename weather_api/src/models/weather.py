"""
Weather domain models.

Provides Pydantic schemas for:
- The OpenWeather "current weather" response (only the fields we read)
- The projected observation handed to the classifier
- Classification results and their display form
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Upstream wire format
# ============================================================================


class WeatherCondition(BaseModel):
    """One entry of the upstream `weather` array."""

    model_config = ConfigDict(extra="ignore")

    description: str


class MainReadings(BaseModel):
    """The upstream `main` block."""

    model_config = ConfigDict(extra="ignore")

    # Finite and bounded so the Fahrenheit conversion and display rounding cannot overflow
    temp: float = Field(
        ...,
        description="Temperature in degrees Celsius (units=metric)",
        allow_inf_nan=False,
        ge=-273.15,
        le=1000.0,
    )


class OpenWeatherResponse(BaseModel):
    """Subset of the OpenWeather current weather response."""

    model_config = ConfigDict(extra="ignore")

    weather: List[WeatherCondition]
    main: MainReadings


# ============================================================================
# Domain
# ============================================================================


class Coordinate(BaseModel):
    """Validated latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class WeatherObservation(BaseModel):
    """Current conditions projected from the upstream response."""

    model_config = ConfigDict(frozen=True)

    description: str
    temperature_celsius: float = Field(..., allow_inf_nan=False)


class TemperatureLabel(str, Enum):
    """Hot/Cold/Moderate bucket."""

    HOT = "Hot"
    COLD = "Cold"
    MODERATE = "Moderate"


class ClassificationResult(BaseModel):
    """
    Classified temperature.

    Values are kept at full precision; the display properties round to the
    nearest integer.
    """

    model_config = ConfigDict(frozen=True)

    label: TemperatureLabel
    celsius: float
    fahrenheit: float

    @property
    def celsius_display(self) -> int:
        return _round_for_display(self.celsius)

    @property
    def fahrenheit_display(self) -> int:
        return _round_for_display(self.fahrenheit)

    def describe(self) -> str:
        """Render e.g. ``Hot (77F / 25C)``."""
        return f"{self.label.value} ({self.fahrenheit_display}F / {self.celsius_display}C)"


def _round_for_display(value: float) -> int:
    # int() also turns -0.0 into 0
    return int(round(value))
