"""Prometheus metrics for enginoor."""

import logging
import threading
from typing import Optional

from prometheus_client import (
    Counter,
    Histogram,
    start_http_server,
)

logger = logging.getLogger(__name__)

DEFAULT_METRICS_PORT = 8008

# Engine API metrics
engine_api_requests = Counter(
    "enginoor_engine_api_requests_total",
    "Total Engine API requests",
    ["method"],
)

engine_api_errors = Counter(
    "enginoor_engine_api_errors_total",
    "Total Engine API errors",
    ["method", "error_type"],
)

engine_api_latency = Histogram(
    "enginoor_engine_api_latency_seconds",
    "Engine API request latency",
    ["method"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


_server_started = False
_server_lock = threading.Lock()


def start_metrics_server(port: int = DEFAULT_METRICS_PORT) -> bool:
    """Start the Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default 8008)

    Returns:
        True if server started successfully, False if already running
    """
    global _server_started

    with _server_lock:
        if _server_started:
            logger.warning("Metrics server already running")
            return False

        try:
            start_http_server(port)
            _server_started = True
            logger.info(f"Prometheus metrics server started on port {port}")
            return True
        except OSError as e:
            logger.error(f"Failed to start metrics server: {e}")
            return False


def record_engine_api_call(method: str, latency: float, error: Optional[str] = None) -> None:
    """Record an Engine API call.

    Args:
        method: JSON-RPC method name (e.g., 'engine_newPayloadV1')
        latency: Request latency in seconds
        error: Error type if the call failed, None if successful
    """
    engine_api_requests.labels(method=method).inc()
    engine_api_latency.labels(method=method).observe(latency)
    if error:
        record_engine_api_error(method, error)


def record_engine_api_error(method: str, error: str) -> None:
    """Record an Engine API failure detected after the response arrived."""
    engine_api_errors.labels(method=method, error_type=error).inc()
