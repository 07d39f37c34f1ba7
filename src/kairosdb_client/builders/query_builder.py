"""
Builder for query definitions.

Usage:
    builder = QueryBuilder().set_start(1, TimeUnit.DAYS)
    builder.add_metric("cpu.load").add_tag("host", "server1", "server2").set_limit(100)
    query = builder.build()  # frozen Query
"""

from datetime import datetime
from typing import Optional

from kairosdb_client.builders.metric_builder import to_epoch_millis
from kairosdb_client.models.enums import SortOrder, TimeUnit
from kairosdb_client.models.payloads import Query, QueryMetric, RelativeTime


class QueryMetricDraft:
    """Accumulates the tag filters and options of one queried metric."""

    def __init__(self, name: str):
        self.name = name
        self._tags: dict[str, list[str]] = {}
        self._limit: Optional[int] = None
        self._order: Optional[SortOrder] = None

    def add_tag(self, name: str, *values: str) -> "QueryMetricDraft":
        self._tags.setdefault(name, []).extend(values)
        return self

    def set_limit(self, limit: int) -> "QueryMetricDraft":
        self._limit = limit
        return self

    def set_order(self, order: SortOrder) -> "QueryMetricDraft":
        self._order = order
        return self

    def build(self) -> QueryMetric:
        return QueryMetric(
            name=self.name,
            tags={name: tuple(values) for name, values in self._tags.items()},
            limit=self._limit,
            order=self._order,
        )


class QueryBuilder:
    """
    Accumulates a time range and metrics and produces an immutable Query.

    Setting an absolute start clears a relative one and vice versa (same for
    the end), so the last call wins.
    """

    def __init__(self) -> None:
        self._start_absolute: Optional[int] = None
        self._start_relative: Optional[RelativeTime] = None
        self._end_absolute: Optional[int] = None
        self._end_relative: Optional[RelativeTime] = None
        self._cache_time = 0
        self._time_zone: Optional[str] = None
        self._drafts: list[QueryMetricDraft] = []

    def set_start(self, value: int, unit: TimeUnit) -> "QueryBuilder":
        self._start_relative = RelativeTime(value=value, unit=unit)
        self._start_absolute = None
        return self

    def set_start_absolute(self, timestamp: int | datetime) -> "QueryBuilder":
        self._start_absolute = to_epoch_millis(timestamp)
        self._start_relative = None
        return self

    def set_end(self, value: int, unit: TimeUnit) -> "QueryBuilder":
        self._end_relative = RelativeTime(value=value, unit=unit)
        self._end_absolute = None
        return self

    def set_end_absolute(self, timestamp: int | datetime) -> "QueryBuilder":
        self._end_absolute = to_epoch_millis(timestamp)
        self._end_relative = None
        return self

    def set_cache_time(self, seconds: int) -> "QueryBuilder":
        self._cache_time = seconds
        return self

    def set_time_zone(self, time_zone: str) -> "QueryBuilder":
        self._time_zone = time_zone
        return self

    def add_metric(self, name: str) -> QueryMetricDraft:
        draft = QueryMetricDraft(name)
        self._drafts.append(draft)
        return draft

    def build(self) -> Query:
        """
        Raises:
            pydantic.ValidationError: If the range is incomplete or contradictory,
                or no metric was added
        """
        return Query(
            start_absolute=self._start_absolute,
            start_relative=self._start_relative,
            end_absolute=self._end_absolute,
            end_relative=self._end_relative,
            cache_time=self._cache_time,
            time_zone=self._time_zone,
            metrics=tuple(draft.build() for draft in self._drafts),
        )
