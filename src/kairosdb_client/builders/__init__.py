"""
Builders that produce immutable payloads for the client.
"""

from kairosdb_client.builders.metric_builder import MetricBuilder, MetricDraft
from kairosdb_client.builders.query_builder import QueryBuilder, QueryMetricDraft

__all__ = [
    "MetricBuilder",
    "MetricDraft",
    "QueryBuilder",
    "QueryMetricDraft",
]
