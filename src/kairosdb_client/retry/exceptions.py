"""
Retry engine exceptions.

DeliveryExhausted is raised when every attempt of a call failed at the
transport level, i.e. no HTTP status was ever obtained.
"""

from kairosdb_client.exceptions import KairosDBClientError
from kairosdb_client.retry.metadata import RetryMetadata


class DeliveryExhausted(KairosDBClientError):
    """
    Raised when the retry budget is spent on transport failures.

    The last transport error is available as `last_error` and is also chained
    as `__cause__`.

    Attributes:
        operation: Facade operation that failed (e.g. "push_metrics")
        retry_metadata: Attempts made and the error type of each
        last_error: Transport error of the final attempt
    """

    def __init__(
        self,
        operation: str,
        retry_metadata: RetryMetadata,
        last_error: Exception,
    ) -> None:
        self.operation = operation
        self.retry_metadata = retry_metadata
        self.last_error = last_error

        super().__init__(
            f"Delivery of {operation} failed after {retry_metadata.total_attempts} attempts. "
            f"Final error: {type(last_error).__name__}: {last_error}",
            details={
                "operation": operation,
                "total_attempts": retry_metadata.total_attempts,
                "transport_errors": list(retry_metadata.transport_errors),
            },
        )
