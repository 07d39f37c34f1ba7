"""Monitoring and metrics instrumentation for the KairosDB client.

Exports Prometheus metrics for exchanges, retries and decoding failures.
"""

from kairosdb_client.monitoring.metrics import (
    decoding_errors_total,
    delivery_exhausted_total,
    request_latency_seconds,
    requests_total,
    transport_failures_total,
)

__all__ = [
    "requests_total",
    "request_latency_seconds",
    "transport_failures_total",
    "delivery_exhausted_total",
    "decoding_errors_total",
]
