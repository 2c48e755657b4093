"""
OpenWeather current-weather client.

Issues a single GET per lookup over a shared aiohttp session and projects
the JSON body onto a WeatherObservation. There are no retries.

The request URL carries the API key in its query string, so neither error
messages nor log entries produced here include the URL.
"""

import asyncio
import time
from typing import Optional

import aiohttp
import structlog
from pydantic import ValidationError

from weather_api.src.exceptions import UpstreamDecodeError, UpstreamNetworkError
from weather_api.src.models.weather import Coordinate, OpenWeatherResponse, WeatherObservation
from shared.metrics import WeatherServiceMetrics

logger = structlog.get_logger(__name__)


class WeatherClient:
    """Client for the OpenWeather "current weather" endpoint."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        timeout_seconds: float = 10.0,
        metrics: Optional[WeatherServiceMetrics] = None,
    ):
        """
        Initialize weather client.

        Args:
            session: Shared aiohttp session (owned by the application)
            base_url: Current weather endpoint URL
            timeout_seconds: Total timeout for one request
            metrics: Optional metrics sink
        """
        self.session = session
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.metrics = metrics

    async def fetch_weather(self, coordinate: Coordinate, api_key: str) -> WeatherObservation:
        """
        Fetch current conditions for a coordinate.

        Args:
            coordinate: Validated latitude/longitude
            api_key: Validated OpenWeather API key

        Returns:
            The observation's description and temperature in Celsius

        Raises:
            UpstreamNetworkError: On connection failure, timeout or non-2xx status
            UpstreamDecodeError: If the body is not the expected JSON shape or
                carries no weather conditions
        """
        # Fixed-point, never exponent notation (1e-05)
        params = {
            "lat": f"{coordinate.latitude:f}",
            "lon": f"{coordinate.longitude:f}",
            "units": "metric",
            "appid": api_key,
        }

        start_time = time.monotonic()
        try:
            async with self.session.get(
                self.base_url, params=params, timeout=self.timeout
            ) as response:
                status = response.status
                body = await response.read()
        except asyncio.TimeoutError:
            self._record("timeout", start_time)
            raise UpstreamNetworkError(
                f"weather provider timed out after {self.timeout.total}s"
            )
        except aiohttp.ClientError as e:
            self._record("network_error", start_time)
            raise UpstreamNetworkError(
                f"weather provider request failed: {type(e).__name__}"
            )

        if not 200 <= status < 300:
            self._record("http_error", start_time)
            raise UpstreamNetworkError(
                f"weather provider returned HTTP {status}", upstream_status=status
            )

        try:
            payload = OpenWeatherResponse.model_validate_json(body)
        except ValidationError as e:
            self._record("decode_error", start_time)
            raise UpstreamDecodeError(
                f"unexpected weather provider response: {e.error_count()} validation error(s)",
                upstream_status=status,
            )

        if not payload.weather:
            self._record("decode_error", start_time)
            raise UpstreamDecodeError(
                "weather provider returned an empty weather conditions list",
                upstream_status=status,
            )

        self._record("success", start_time)
        logger.debug(
            "upstream_request_completed",
            status=status,
            conditions=len(payload.weather),
        )

        return WeatherObservation(
            description=payload.weather[0].description,
            temperature_celsius=payload.main.temp,
        )

    def _record(self, outcome: str, start_time: float) -> None:
        """Update upstream metrics for one request."""
        if self.metrics is None:
            return
        self.metrics.upstream_requests.labels(outcome=outcome).inc()
        self.metrics.upstream_duration.observe(time.monotonic() - start_time)
