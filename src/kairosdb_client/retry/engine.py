"""
Retry engine for transport-level failures.

Runs one "send and interpret" attempt up to retry_count + 1 times. The first
attempt that yields any HTTP response ends the loop, whatever its status:
4xx/5xx answers are deterministic and retrying them could duplicate writes
the server already persisted. Only httpx transport errors (connect, timeout,
I/O before a status was obtained) are retried.

Usage:
    engine = RetryEngine(retry_count=3)
    response = engine.execute(attempt, operation="push_metrics")
"""

import time
from typing import Callable, Optional, TypeVar

import httpx
import structlog

from kairosdb_client.exceptions import InvalidInputError
from kairosdb_client.monitoring.metrics import (
    delivery_exhausted_total,
    transport_failures_total,
)
from kairosdb_client.retry.exceptions import DeliveryExhausted
from kairosdb_client.retry.metadata import RetryMetadata

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryEngine:
    """
    Bounded retry loop driven by transport failures.

    Attributes:
        retry_count: Retries after the first attempt (0 = single attempt)
        backoff_seconds: Base delay for exponential backoff (0 = no delay)
    """

    def __init__(self, retry_count: int, backoff_seconds: float = 0.0):
        if retry_count < 0:
            raise InvalidInputError(
                "retry_count must be >= 0", details={"retry_count": retry_count}
            )
        if backoff_seconds < 0:
            raise InvalidInputError(
                "backoff_seconds must be >= 0", details={"backoff_seconds": backoff_seconds}
            )
        self.retry_count = retry_count
        self.backoff_seconds = backoff_seconds

    @property
    def max_attempts(self) -> int:
        return self.retry_count + 1

    def backoff_for(self, attempt: int) -> float:
        """Delay before the attempt following `attempt` (1-indexed)."""
        if not self.backoff_seconds:
            return 0.0
        return self.backoff_seconds * (2 ** (attempt - 1))

    def execute(self, attempt_fn: Callable[[], T], operation: str = "request") -> T:
        """
        Run attempt_fn until it returns or the budget is spent.

        Args:
            attempt_fn: Sends one request and interprets its response
            operation: Operation name for logs and metrics

        Returns:
            The value of the first attempt that did not fail at transport level

        Raises:
            DeliveryExhausted: Every attempt raised httpx.TransportError
            Exception: Any non-transport error of attempt_fn, unchanged
        """
        max_attempts = self.max_attempts
        start_time_ms = int(time.time() * 1000)
        transport_errors: list[str] = []
        last_error: Optional[httpx.TransportError] = None

        for attempt in range(1, max_attempts + 1):
            if last_error is not None:
                backoff = self.backoff_for(attempt - 1)
                if backoff:
                    logger.info(
                        "Retrying after backoff",
                        operation=operation,
                        next_attempt=attempt,
                        backoff_seconds=backoff,
                    )
                    time.sleep(backoff)

            try:
                result = attempt_fn()
            except httpx.TransportError as e:
                last_error = e
                transport_errors.append(type(e).__name__)
                transport_failures_total.labels(
                    operation=operation, error_type=type(e).__name__
                ).inc()
                logger.warning(
                    "Transport failure",
                    operation=operation,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                continue

            if attempt > 1:
                logger.info(
                    "Delivery succeeded after retry",
                    operation=operation,
                    attempt=attempt,
                    transport_errors=transport_errors,
                )
            return result

        retry_metadata = RetryMetadata(
            total_attempts=max_attempts,
            max_attempts=max_attempts,
            transport_errors=tuple(transport_errors),
            total_latency_ms=int(time.time() * 1000) - start_time_ms,
        )
        delivery_exhausted_total.labels(operation=operation).inc()
        logger.error(
            "Retry budget exhausted",
            operation=operation,
            total_attempts=max_attempts,
            transport_errors=transport_errors,
        )
        raise DeliveryExhausted(
            operation=operation,
            retry_metadata=retry_metadata,
            last_error=last_error,
        ) from last_error
