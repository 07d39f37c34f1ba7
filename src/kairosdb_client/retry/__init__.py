"""
Retry engine for transport failures.

Main Components:
    - RetryEngine: runs an attempt up to retry_count + 1 times
    - RetryMetadata: immutable history of the attempts of one call
    - DeliveryExhausted: raised when every attempt failed at transport level

Usage:
    >>> from kairosdb_client.retry import RetryEngine
    >>> engine = RetryEngine(retry_count=3)
    >>> response = engine.execute(send_once, operation="query")
"""

from kairosdb_client.retry.engine import RetryEngine
from kairosdb_client.retry.exceptions import DeliveryExhausted
from kairosdb_client.retry.metadata import RetryMetadata

__all__ = [
    "RetryEngine",
    "RetryMetadata",
    "DeliveryExhausted",
]
