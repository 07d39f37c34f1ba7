"""
Outbound payload models: metric batches and query definitions.

These are the finished, read-only values produced by the builders in
kairosdb_client.builders. The client only calls to_wire() on them and sends
the result as JSON; it never inspects their contents.
"""

from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)

from kairosdb_client.models.enums import SortOrder, TimeUnit


def _check_tag_pair(name: str, value: str) -> None:
    if not name or not name.strip():
        raise ValueError("tag name must not be empty")
    if not value or not value.strip():
        raise ValueError(f"tag {name!r} must have a non-empty value")


class DataPoint(BaseModel):
    """A single (timestamp, value) sample."""
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")
    # Booleans and numeric strings are not data point values
    value: StrictInt | StrictFloat = Field(..., description="Sample value (long or double)")

    def to_wire(self) -> list[Any]:
        return [self.timestamp, self.value]


class Metric(BaseModel):
    """Data points for one metric name and tag set."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Metric name")
    tags: dict[str, str] = Field(default_factory=dict, description="Tag name -> tag value")
    datapoints: tuple[DataPoint, ...] = Field(default=(), description="Samples in insertion order")
    ttl: int = Field(default=0, ge=0, description="Time to live in seconds (0 = server default)")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, tags: dict[str, str]) -> dict[str, str]:
        for name, value in tags.items():
            _check_tag_pair(name, value)
        return tags

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "name": self.name,
            "tags": dict(self.tags),
            "datapoints": [point.to_wire() for point in self.datapoints],
        }
        if self.ttl:
            wire["ttl"] = self.ttl
        return wire


class MetricBatch(BaseModel):
    """A batch of metrics pushed in one request."""
    model_config = ConfigDict(frozen=True)

    metrics: tuple[Metric, ...] = Field(default=(), description="Metrics in insertion order")

    def to_wire(self) -> list[dict[str, Any]]:
        return [metric.to_wire() for metric in self.metrics]


class RelativeTime(BaseModel):
    """A time relative to now, e.g. "1 day ago"."""
    model_config = ConfigDict(frozen=True)

    value: int = Field(..., ge=1)
    unit: TimeUnit

    def to_wire(self) -> dict[str, Any]:
        return {"value": self.value, "unit": self.unit.value}


class QueryMetric(BaseModel):
    """One metric selected by a query, optionally filtered by tags."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    tags: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Tag name -> accepted values (any value matches)"
    )
    limit: Optional[int] = Field(default=None, ge=1, description="Max data points returned")
    order: Optional[SortOrder] = Field(default=None)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, tags: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        for name, values in tags.items():
            if not values:
                raise ValueError(f"tag {name!r} must have at least one value")
            for value in values:
                _check_tag_pair(name, value)
        return tags

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"name": self.name}
        if self.tags:
            wire["tags"] = {name: list(values) for name, values in self.tags.items()}
        if self.limit is not None:
            wire["limit"] = self.limit
        if self.order is not None:
            wire["order"] = self.order.value
        return wire


class Query(BaseModel):
    """
    A query definition over a time range.

    Exactly one start (absolute or relative) is required; the end is optional
    and defaults to "now" on the server.
    """
    model_config = ConfigDict(frozen=True)

    start_absolute: Optional[int] = Field(default=None, ge=0, description="Epoch milliseconds")
    start_relative: Optional[RelativeTime] = None
    end_absolute: Optional[int] = Field(default=None, ge=0, description="Epoch milliseconds")
    end_relative: Optional[RelativeTime] = None
    cache_time: int = Field(default=0, ge=0, description="Server-side cache time in seconds")
    time_zone: Optional[str] = Field(default=None, description="IANA time zone for range aggregation")
    metrics: tuple[QueryMetric, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_range(self) -> "Query":
        if (self.start_absolute is None) == (self.start_relative is None):
            raise ValueError("exactly one of start_absolute or start_relative must be set")
        if self.end_absolute is not None and self.end_relative is not None:
            raise ValueError("end_absolute and end_relative are mutually exclusive")
        if (
            self.start_absolute is not None
            and self.end_absolute is not None
            and self.end_absolute < self.start_absolute
        ):
            raise ValueError("end_absolute must not be before start_absolute")
        return self

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.start_absolute is not None:
            wire["start_absolute"] = self.start_absolute
        if self.start_relative is not None:
            wire["start_relative"] = self.start_relative.to_wire()
        if self.end_absolute is not None:
            wire["end_absolute"] = self.end_absolute
        if self.end_relative is not None:
            wire["end_relative"] = self.end_relative.to_wire()
        if self.cache_time:
            wire["cache_time"] = self.cache_time
        if self.time_zone:
            wire["time_zone"] = self.time_zone
        wire["metrics"] = [metric.to_wire() for metric in self.metrics]
        return wire
