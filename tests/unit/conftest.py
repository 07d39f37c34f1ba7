"""Unit test fixtures (mocks and stubs).

Provides mock transports for testing the client without a KairosDB server.
"""

import pytest
from unittest.mock import MagicMock

import httpx


@pytest.fixture
def failing_http_client():
    """Mock transport whose every send fails before any HTTP status."""
    mock = MagicMock(spec=httpx.Client)
    mock.send = MagicMock(side_effect=httpx.ConnectError("Fake Exception"))
    return mock


@pytest.fixture
def mock_http_client():
    """Factory for a mock transport that always answers with the given response.

    Usage:
        def test_something(mock_http_client):
            client = mock_http_client(httpx.Response(204))
    """
    def _create(response: httpx.Response) -> MagicMock:
        mock = MagicMock(spec=httpx.Client)
        mock.send = MagicMock(return_value=response)
        return mock

    return _create
