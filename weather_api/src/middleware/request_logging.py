"""
Request logging, metrics and security header middleware.

Provides:
- Correlation IDs bound into every log entry of a request and echoed back
  in the X-Correlation-ID response header
- Request start/completion logs with duration; unexpected exceptions are
  logged and answered with a plain-text 500
- Prometheus request counters and latency histograms
- Standard security response headers
"""

import time
import uuid
from typing import Optional

import structlog
from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from shared.logging import bind_context, clear_context
from shared.metrics import WeatherServiceMetrics

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics."""

    def __init__(self, app: ASGIApp, metrics: Optional[WeatherServiceMetrics] = None):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        clear_context()
        bind_context(correlation_id=correlation_id)

        start_time = time.time()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            # Answered here so the 500 still carries the correlation ID
            response = PlainTextResponse(
                "Internal server error",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        duration = time.time() - start_time
        endpoint = self._endpoint_label(request)

        if self.metrics is not None:
            self.metrics.http_requests.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            self.metrics.http_request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

        logger.info(
            "request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration=f"{duration:.3f}s",
        )

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        """Route template for metrics labels; unknown paths share one label."""
        route = request.scope.get("route")
        return getattr(route, "path", "unmatched")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cache-Control"] = "no-store"

        return response
