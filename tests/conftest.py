"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from pathlib import Path
from typing import Dict, Any

import httpx

from kairosdb_client.builders import MetricBuilder, QueryBuilder
from kairosdb_client.config import Settings
from kairosdb_client.models.enums import TimeUnit


class BadStream(httpx.SyncByteStream):
    """Body stream that fails on first read, like a server that advertises a
    body and then closes the connection."""

    def __init__(self, error: Exception | None = None):
        self.error = error or httpx.ReadError("unexpected end of stream")

    def __iter__(self):
        raise self.error


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    The .env file is ignored so a developer's local configuration never leaks in.
    """
    return Settings(
        _env_file=None,
        KAIROSDB_URL="http://localhost:8080",
        KAIROSDB_RETRY_COUNT=3,
        KAIROSDB_TIMEOUT=5.0,
        KAIROSDB_BACKOFF_SECONDS=0.0,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def query_response_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Successful query response body as dict."""
    with open(fixtures_dir / "query_response.json") as f:
        return json.load(f)


@pytest.fixture
def error_response_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Error envelope returned by KairosDB for an invalid push."""
    with open(fixtures_dir / "error_response.json") as f:
        return json.load(f)


@pytest.fixture
def metric_builder() -> MetricBuilder:
    """Builder with one metric, one tag and one data point."""
    builder = MetricBuilder()
    builder.add_metric("newMetric").add_data_point(10, 10).add_tag("host", "server1")
    return builder


@pytest.fixture
def query_builder() -> QueryBuilder:
    """Builder querying one metric over the last day."""
    builder = QueryBuilder()
    builder.set_start(1, TimeUnit.DAYS)
    builder.add_metric("newMetric")
    return builder


@pytest.fixture
def make_unreadable_response():
    """Factory for responses whose body raises on first read.

    Usage:
        def test_something(make_unreadable_response):
            response = make_unreadable_response(502, httpx.RemoteProtocolError("peer closed"))
    """
    def _create(status_code: int = 500, error: Exception | None = None) -> httpx.Response:
        return httpx.Response(status_code, stream=BadStream(error))

    return _create


@pytest.fixture
def unreadable_response(make_unreadable_response) -> httpx.Response:
    """HTTP 500 whose body raises on first read."""
    return make_unreadable_response(500)
