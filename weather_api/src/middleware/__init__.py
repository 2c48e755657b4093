"""HTTP middleware for the weather service."""

from weather_api.src.middleware.request_logging import (
    CORRELATION_ID_HEADER,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

__all__ = [
    "CORRELATION_ID_HEADER",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
