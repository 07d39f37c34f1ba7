"""
Builder for metric batches.

Usage:
    builder = MetricBuilder()
    builder.add_metric("cpu.load").add_tag("host", "server1").add_data_point(1700000000000, 0.42)
    batch = builder.build()  # frozen MetricBatch
"""

from datetime import datetime
from typing import Optional

from kairosdb_client.models.payloads import DataPoint, Metric, MetricBatch


def to_epoch_millis(timestamp: int | datetime) -> int:
    """Convert a datetime (or pass through epoch milliseconds) to epoch milliseconds."""
    if isinstance(timestamp, datetime):
        return int(timestamp.timestamp() * 1000)
    return timestamp


class MetricDraft:
    """Accumulates the tags and data points of one metric."""

    def __init__(self, name: str):
        self.name = name
        self._tags: dict[str, str] = {}
        self._datapoints: list[DataPoint] = []
        self._ttl = 0

    def add_tag(self, name: str, value: str) -> "MetricDraft":
        self._tags[name] = value
        return self

    def add_tags(self, tags: dict[str, str]) -> "MetricDraft":
        self._tags.update(tags)
        return self

    def add_data_point(self, timestamp: int | datetime, value: int | float) -> "MetricDraft":
        self._datapoints.append(DataPoint(timestamp=to_epoch_millis(timestamp), value=value))
        return self

    def set_ttl(self, seconds: int) -> "MetricDraft":
        self._ttl = seconds
        return self

    def build(self) -> Metric:
        return Metric(
            name=self.name,
            tags=dict(self._tags),
            datapoints=tuple(self._datapoints),
            ttl=self._ttl,
        )


class MetricBuilder:
    """
    Accumulates metrics and produces an immutable MetricBatch.

    The builder stays mutable and can be built several times; every build()
    returns an independent value.
    """

    def __init__(self) -> None:
        self._drafts: list[MetricDraft] = []

    def add_metric(self, name: str, tags: Optional[dict[str, str]] = None) -> MetricDraft:
        draft = MetricDraft(name)
        if tags:
            draft.add_tags(tags)
        self._drafts.append(draft)
        return draft

    @property
    def metrics(self) -> list[MetricDraft]:
        return list(self._drafts)

    def build(self) -> MetricBatch:
        """
        Raises:
            pydantic.ValidationError: If a metric has an empty name or tag
        """
        return MetricBatch(metrics=tuple(draft.build() for draft in self._drafts))
