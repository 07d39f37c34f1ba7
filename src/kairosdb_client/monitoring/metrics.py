"""Prometheus metrics for the KairosDB client.

Metrics live in the default prometheus_client registry; applications expose
them through their own /metrics endpoint.
"""

from prometheus_client import Counter, Histogram

# === Exchange Metrics ===

requests_total = Counter(
    "kairosdb_requests_total",
    "Completed exchanges by operation and status class",
    ["operation", "status_class"],
)
"""
Completed exchanges (any HTTP status obtained).

Labels:
- operation: push_metrics, query, query_tags, get_metric_names, ...
- status_class: success, client_error, server_error, ...
"""

request_latency_seconds = Histogram(
    "kairosdb_request_latency_seconds",
    "Latency of a facade call including retries",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# === Retry Metrics ===

transport_failures_total = Counter(
    "kairosdb_transport_failures_total",
    "Attempts that failed before any HTTP status was obtained",
    ["operation", "error_type"],
)
"""
Transport failures by operation and httpx error type (ConnectError, ReadTimeout, ...).

A steady rate here with few delivery_exhausted entries means retries are
absorbing transient faults.
"""

delivery_exhausted_total = Counter(
    "kairosdb_delivery_exhausted_total",
    "Calls that spent the whole retry budget on transport failures",
    ["operation"],
)

# === Decoding Metrics ===

decoding_errors_total = Counter(
    "kairosdb_decoding_errors_total",
    "Readable response bodies that were not valid structured data",
    ["operation"],
)
