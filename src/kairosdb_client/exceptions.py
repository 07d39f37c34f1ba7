"""
Custom exceptions for the KairosDB client.

Every error raised by the client itself derives from KairosDBClientError so
callers can catch any client failure with a single except clause. Transport
faults are the exception: they are raised by httpx and only surface after the
retry budget is spent, wrapped in DeliveryExhausted (see retry.exceptions).
"""

from typing import Any


class KairosDBClientError(Exception):
    """
    Base exception for all KairosDB client errors.

    Carries a human-readable message plus a structured details dict that is
    safe to attach to log events.
    """
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(KairosDBClientError, ValueError):
    """
    Raised when caller-supplied configuration is structurally invalid.

    Examples:
    - None or empty endpoint URL
    - Negative (or non-integer) retry count
    - Empty metric name passed to delete_metric

    Never retried: surfaced at the call that introduced the bad value.
    """
    pass


class MalformedEndpointError(KairosDBClientError, ValueError):
    """
    Raised when the endpoint URL is non-empty but not an absolute http(s) URL.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Malformed KairosDB endpoint URL: {url!r} ({reason})",
            details={"url": url, "reason": reason},
        )
        self.url = url


class DecodingError(KairosDBClientError):
    """
    Raised when a response body was readable but is not valid structured data.

    This signals a protocol mismatch between client and server. It is never
    retried: the same request would get the same malformed answer.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        raw_content: str | None = None,
        parse_error: str | None = None,
    ):
        """
        Initialize decoding error.

        Args:
            message: Error description
            status_code: HTTP status of the exchange that carried the body
            raw_content: Malformed body (first 500 chars are kept for debugging)
            parse_error: Message from the underlying JSON/pydantic failure
        """
        details: dict[str, Any] = {"status_code": status_code}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error

        super().__init__(message, details)
        self.status_code = status_code
