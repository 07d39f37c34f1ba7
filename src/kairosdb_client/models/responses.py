"""
Response models returned by the client, plus the wire envelopes they are
decoded from.

A Response always carries the HTTP status and a (possibly empty) tuple of
error messages. Subclasses add the decoded success payload of their
operation. All responses are frozen: one is built per completed exchange and
handed to the caller.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from kairosdb_client.models.enums import StatusClass


class Response(BaseModel):
    """Status code and error messages of a completed exchange."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    status_code: int = Field(..., description="HTTP status code")
    errors: tuple[str, ...] = Field(default=(), description="Error messages from the server")

    @property
    def status_class(self) -> StatusClass:
        return StatusClass.from_status_code(self.status_code)

    @property
    def is_success(self) -> bool:
        return self.status_class.is_success


class SeriesResult(BaseModel):
    """One result series: a metric name, its tags and data points."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    tags: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    group_by: tuple[dict[str, Any], ...] = Field(default=())
    values: tuple[tuple[int, Any], ...] = Field(default=(), description="(timestamp, value) pairs")


class QueryResult(BaseModel):
    """Results of one metric query within a query request."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    sample_size: int = Field(default=0, ge=0)
    results: tuple[SeriesResult, ...] = Field(default=())


class QueryResponse(Response):
    """Response of a query: one QueryResult per queried metric."""

    queries: tuple[QueryResult, ...] = Field(default=())

    def results(self) -> list[SeriesResult]:
        """All result series across queries, in order."""
        return [series for query in self.queries for series in query.results]


class GetResponse(Response):
    """Response of a name-listing endpoint (metric names, tag names, tag values)."""

    results: tuple[str, ...] = Field(default=())


class VersionResponse(Response):
    """Response of the version endpoint."""

    version: Optional[str] = None


class ErrorEnvelope(BaseModel):
    """Wire shape of an error body: {"errors": ["message", ...]}."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    errors: tuple[str, ...] = Field(default=())
