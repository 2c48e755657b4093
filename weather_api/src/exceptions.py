"""
Exception hierarchy for the weather service.

Every error carries the HTTP status it maps to and a short public message.
The exception message itself is the internal detail: it is logged, never
returned to clients.
"""

from typing import Optional


class WeatherServiceError(Exception):
    """Base class for all weather service errors."""

    status_code: int = 500
    public_message: str = "Internal server error"


# ============================================================================
# Configuration
# ============================================================================


class ConfigurationError(WeatherServiceError):
    """Startup configuration is missing or invalid. Fatal."""


# ============================================================================
# Credentials
# ============================================================================


class CredentialError(WeatherServiceError):
    """The weather provider API key is missing or malformed."""

    status_code = 500
    public_message = "invalid API key"


class MissingAPIKeyError(CredentialError):
    """No API key was configured."""


class InvalidAPIKeyFormatError(CredentialError):
    """The configured API key does not look like an OpenWeather key."""


# ============================================================================
# Client input
# ============================================================================


class InvalidInputError(WeatherServiceError):
    """A query parameter failed validation."""

    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return f"Invalid {self.field}"


class InvalidFormatError(InvalidInputError):
    """The value is not a decimal number."""


class OutOfRangeError(InvalidInputError):
    """The value parsed but lies outside the allowed range."""


# ============================================================================
# Upstream provider
# ============================================================================


class UpstreamError(WeatherServiceError):
    """The weather provider could not produce a usable observation."""

    status_code = 500
    public_message = "upstream weather provider error"

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamNetworkError(UpstreamError):
    """Connection failure, timeout, or non-2xx answer."""


class UpstreamDecodeError(UpstreamError):
    """The response body is not the JSON shape we expect."""
