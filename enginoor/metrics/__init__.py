"""Prometheus metrics for enginoor."""

from .metrics import (
    DEFAULT_METRICS_PORT,
    engine_api_requests,
    engine_api_errors,
    engine_api_latency,
    start_metrics_server,
    record_engine_api_call,
    record_engine_api_error,
)

__all__ = [
    "DEFAULT_METRICS_PORT",
    "engine_api_requests",
    "engine_api_errors",
    "engine_api_latency",
    "start_metrics_server",
    "record_engine_api_call",
    "record_engine_api_error",
]
