"""
Python client for the KairosDB time-series database.

Pushes metric batches and runs queries over HTTP, returning typed responses:
- KairosDBClient: validates configuration and runs each call through a
  bounded retry loop on transport failures
- MetricBuilder / QueryBuilder: produce immutable payloads
- Response / QueryResponse: status code, server error messages and results
- configure_logging: opt-in rendering of the client's log events
"""

from kairosdb_client.builders import MetricBuilder, QueryBuilder
from kairosdb_client.client import KairosDBClient
from kairosdb_client.exceptions import (
    DecodingError,
    InvalidInputError,
    KairosDBClientError,
    MalformedEndpointError,
)
from kairosdb_client.logging_config import configure_logging
from kairosdb_client.models import (
    GetResponse,
    QueryResponse,
    Response,
    SortOrder,
    TimeUnit,
    VersionResponse,
)
from kairosdb_client.retry import DeliveryExhausted

__version__ = "0.1.0"

__all__ = [
    "KairosDBClient",
    "MetricBuilder",
    "QueryBuilder",
    "Response",
    "QueryResponse",
    "GetResponse",
    "VersionResponse",
    "TimeUnit",
    "SortOrder",
    "KairosDBClientError",
    "InvalidInputError",
    "MalformedEndpointError",
    "DecodingError",
    "DeliveryExhausted",
    "configure_logging",
]
