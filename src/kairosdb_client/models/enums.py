"""
Enumerations for KairosDB client data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class TimeUnit(str, Enum):
    """
    Units accepted by KairosDB for relative times.

    Values are the lowercase plural names used on the wire.
    """

    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class SortOrder(str, Enum):
    """Order of data points within a query result."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class StatusClass(str, Enum):
    """
    Classification of an HTTP status code.

    Only SUCCESS responses are decoded as the operation's payload; every
    other class is decoded as an error envelope.
    """

    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECTION = "redirection"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"

    @classmethod
    def from_status_code(cls, status_code: int) -> "StatusClass":
        """Map a status code to its class (1xx..5xx, anything else is UNKNOWN)."""
        return _STATUS_CLASSES.get(status_code // 100, cls.UNKNOWN)

    @property
    def is_success(self) -> bool:
        return self is StatusClass.SUCCESS


_STATUS_CLASSES = {
    1: StatusClass.INFORMATIONAL,
    2: StatusClass.SUCCESS,
    3: StatusClass.REDIRECTION,
    4: StatusClass.CLIENT_ERROR,
    5: StatusClass.SERVER_ERROR,
}
