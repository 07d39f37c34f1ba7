"""Integration test fixtures (service checks and prerequisites).

Tests that need a live KairosDB are skipped when it is not reachable.
End-to-end tests through httpx.MockTransport run everywhere.
"""

import pytest
import httpx

from kairosdb_client import KairosDBClient
from kairosdb_client.transport import create_http_client


KAIROSDB_URL = "http://localhost:8080"


@pytest.fixture(scope="session")
def check_kairosdb():
    """Check if KairosDB is available at localhost:8080.

    Skips tests if KairosDB is not reachable.
    """
    try:
        response = httpx.get(f"{KAIROSDB_URL}/api/v1/version", timeout=5)
        if response.status_code != 200:
            pytest.skip("KairosDB not available (non-200 status)")
    except httpx.HTTPError as e:
        pytest.skip(f"KairosDB not available: {e}")


@pytest.fixture
def real_client(check_kairosdb):
    """KairosDBClient talking to the local server.

    Requires KairosDB to be running (checked by check_kairosdb fixture).
    """
    client = KairosDBClient(KAIROSDB_URL, retry_count=1, timeout=10.0)
    yield client
    client.close()


@pytest.fixture
def mock_server():
    """Factory for a KairosDBClient backed by httpx.MockTransport.

    Every request the client sends is recorded in the returned list.

    Usage:
        def test_something(mock_server):
            client, requests = mock_server(lambda request: httpx.Response(204))
    """
    clients = []

    def _create(handler, retry_count: int = 3):
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http_client = create_http_client(
            timeout=5.0, transport=httpx.MockTransport(recording_handler)
        )
        clients.append(http_client)
        client = KairosDBClient(KAIROSDB_URL, retry_count=retry_count, http_client=http_client)
        return client, requests

    yield _create

    for http_client in clients:
        http_client.close()
