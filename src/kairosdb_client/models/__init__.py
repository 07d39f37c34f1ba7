"""
Data models for the KairosDB client.

- payloads: immutable outbound values (MetricBatch, Query)
- responses: typed responses and the wire envelopes they are decoded from
- enums: closed taxonomies (TimeUnit, SortOrder, StatusClass)
"""

from kairosdb_client.models.enums import SortOrder, StatusClass, TimeUnit
from kairosdb_client.models.payloads import (
    DataPoint,
    Metric,
    MetricBatch,
    Query,
    QueryMetric,
    RelativeTime,
)
from kairosdb_client.models.responses import (
    ErrorEnvelope,
    GetResponse,
    QueryResponse,
    QueryResult,
    Response,
    SeriesResult,
    VersionResponse,
)

__all__ = [
    # Enums
    "SortOrder",
    "StatusClass",
    "TimeUnit",
    # Payloads
    "DataPoint",
    "Metric",
    "MetricBatch",
    "Query",
    "QueryMetric",
    "RelativeTime",
    # Responses
    "ErrorEnvelope",
    "GetResponse",
    "QueryResponse",
    "QueryResult",
    "Response",
    "SeriesResult",
    "VersionResponse",
]
