"""
Transport capability consumed by the client.

The client needs a single operation: send one fully built httpx.Request and
return the httpx.Response, or raise an httpx.TransportError subclass if no
response was obtained. httpx.Client satisfies this protocol, and so does any
test double that exposes the same send() signature.
"""

from typing import Optional, Protocol, runtime_checkable

import httpx
import structlog

from kairosdb_client.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = structlog.get_logger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can send an httpx.Request and return its response."""

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        ...


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Build the default httpx.Client used when no transport is injected.

    Args:
        timeout: Request timeout in seconds
        user_agent: User-Agent header value
        transport: Optional low-level httpx transport (e.g. httpx.MockTransport)
    """
    client = httpx.Client(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": user_agent},
        transport=transport,
    )
    logger.debug("Created httpx Client", timeout=timeout)
    return client
