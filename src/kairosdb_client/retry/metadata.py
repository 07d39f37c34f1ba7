"""
Retry metadata tracking.

This module defines the RetryMetadata dataclass that captures the delivery
history of one facade call, attached to DeliveryExhausted for debugging.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryMetadata:
    """
    Delivery history of one call.

    Attributes:
        total_attempts: Number of transport attempts made
        max_attempts: Attempt budget of the call (retry_count + 1)
        transport_errors: Error type name of each failed attempt, in order
        total_latency_ms: Time from first attempt to final outcome (ms)
    """

    total_attempts: int
    max_attempts: int
    transport_errors: tuple[str, ...] = ()
    total_latency_ms: int = 0

    def __post_init__(self) -> None:
        """Validate metadata invariants."""
        if self.total_attempts < 1:
            raise ValueError("total_attempts must be >= 1")

        if self.total_attempts > self.max_attempts:
            raise ValueError("total_attempts must not exceed max_attempts")

        if len(self.transport_errors) > self.total_attempts:
            raise ValueError("more transport errors than attempts")

        if self.total_latency_ms < 0:
            raise ValueError("total_latency_ms must be >= 0")
