"""Prometheus metrics definitions and helpers.

Provides the metric definitions for the weather service HTTP surface and its
upstream provider calls.
"""

from typing import Callable, Optional

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CollectorRegistry,
)


class WeatherServiceMetrics:
    """Weather service metrics."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        """Initialize weather service metrics.

        A fresh registry is created when none is given so that several
        application instances (e.g. in tests) never collide on metric names.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry if registry is not None else CollectorRegistry()

        # Inbound requests
        self.http_requests = Counter(
            "weather_http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "weather_http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry,
        )

        # Upstream provider calls
        self.upstream_requests = Counter(
            "weather_upstream_requests_total",
            "Total requests sent to the weather provider",
            ["outcome"],
            registry=self.registry,
        )

        self.upstream_duration = Histogram(
            "weather_upstream_request_duration_seconds",
            "Time spent waiting on the weather provider",
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
            registry=self.registry,
        )

        # Classification results
        self.classifications = Counter(
            "weather_classifications_total",
            "Temperature classifications returned to clients",
            ["label"],
            registry=self.registry,
        )


def get_metrics_handler(metrics: WeatherServiceMetrics) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Args:
        metrics: Metrics whose registry should be exported

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(metrics.registry)

    return metrics_handler
