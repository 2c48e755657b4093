"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    WeatherServiceMetrics,
    get_metrics_handler,
)

__all__ = [
    "WeatherServiceMetrics",
    "get_metrics_handler",
]
