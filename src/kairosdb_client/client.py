"""
KairosDB HTTP client.

Validates the endpoint and retry budget, serializes payloads, delivers them
through the RetryEngine and hands every obtained response to the
ResponseInterpreter.

Endpoints:
- POST   /api/v1/datapoints              push metrics
- POST   /api/v1/datapoints/query        query data points
- POST   /api/v1/datapoints/query/tags   query tags only
- POST   /api/v1/datapoints/delete       delete the data points a query selects
- DELETE /api/v1/metric/{name}           delete a metric
- GET    /api/v1/metricnames, /tagnames, /tagvalues, /version
"""

import json
import threading
from typing import Any, Optional, TypeVar
from urllib.parse import quote

import httpx
import structlog

from kairosdb_client.builders.metric_builder import MetricBuilder
from kairosdb_client.builders.query_builder import QueryBuilder
from kairosdb_client.config import (
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    Settings,
)
from kairosdb_client.exceptions import (
    DecodingError,
    InvalidInputError,
    MalformedEndpointError,
)
from kairosdb_client.models.payloads import MetricBatch, Query
from kairosdb_client.models.responses import (
    GetResponse,
    QueryResponse,
    Response,
    VersionResponse,
)
from kairosdb_client.monitoring.metrics import (
    decoding_errors_total,
    request_latency_seconds,
    requests_total,
)
from kairosdb_client.response.interpreter import ResponseInterpreter
from kairosdb_client.retry.engine import RetryEngine
from kairosdb_client.transport import Transport, create_http_client

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=Response)

PUSH_PATH = "/api/v1/datapoints"
QUERY_PATH = "/api/v1/datapoints/query"
QUERY_TAGS_PATH = "/api/v1/datapoints/query/tags"
DELETE_DATA_POINTS_PATH = "/api/v1/datapoints/delete"
DELETE_METRIC_PATH = "/api/v1/metric/"
METRIC_NAMES_PATH = "/api/v1/metricnames"
TAG_NAMES_PATH = "/api/v1/tagnames"
TAG_VALUES_PATH = "/api/v1/tagvalues"
VERSION_PATH = "/api/v1/version"


def validate_url(url: Any) -> str:
    """
    Validate an endpoint URL and return it without trailing slashes.

    Raises:
        InvalidInputError: url is None, not a string or blank
        MalformedEndpointError: url is not an absolute http(s) URL, or has a
            query string or fragment
    """
    if url is None:
        raise InvalidInputError("url must not be None")
    if not isinstance(url, str):
        raise InvalidInputError(
            "url must be a string", details={"type": type(url).__name__}
        )
    if not url.strip():
        raise InvalidInputError("url must not be empty")

    url = url.strip()
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise MalformedEndpointError(url, str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise MalformedEndpointError(url, "scheme must be http or https")
    if not parsed.host:
        raise MalformedEndpointError(url, "missing host")
    # Endpoint paths are appended to the base URL as plain text
    if parsed.query or parsed.fragment or "?" in url or "#" in url:
        raise MalformedEndpointError(url, "must not carry a query string or fragment")
    return url.rstrip("/")


def validate_retry_count(retry_count: Any) -> int:
    """
    Raises:
        InvalidInputError: retry_count is not a non-negative int
    """
    if isinstance(retry_count, bool) or not isinstance(retry_count, int):
        raise InvalidInputError(
            "retry_count must be an integer",
            details={"type": type(retry_count).__name__},
        )
    if retry_count < 0:
        raise InvalidInputError(
            "retry_count must be >= 0", details={"retry_count": retry_count}
        )
    return retry_count


class KairosDBClient:
    """
    Synchronous KairosDB client.

    Each operation returns exactly one Response regardless of how many
    attempts it took. Transport failures are retried up to retry_count times
    and then raised as DeliveryExhausted; malformed bodies raise DecodingError
    immediately.

    The HTTP transport is injected at construction (`http_client`). When none
    is given the client creates an httpx.Client and closes it in close().
    """

    def __init__(
        self,
        url: str,
        *,
        retry_count: int = DEFAULT_RETRY_COUNT,
        http_client: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_seconds: float = 0.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize the client.

        Args:
            url: Base URL of the KairosDB server (e.g. http://kairosdb:8080)
            retry_count: Retries after the first attempt on transport failure
            http_client: Transport to send requests with (default: new httpx.Client)
            timeout: Request timeout in seconds
            backoff_seconds: Base of exponential backoff between attempts (0 = none)
            user_agent: User-Agent header value

        Raises:
            InvalidInputError: Empty url, negative retry_count or backoff_seconds
            MalformedEndpointError: url is not an absolute http(s) URL
        """
        self._base_url = validate_url(url)
        self._retry_count = validate_retry_count(retry_count)
        if backoff_seconds < 0:
            raise InvalidInputError(
                "backoff_seconds must be >= 0",
                details={"backoff_seconds": backoff_seconds},
            )
        self._lock = threading.Lock()
        self._backoff_seconds = backoff_seconds
        self._timeout = httpx.Timeout(timeout)
        self._user_agent = user_agent
        self._owns_http_client = http_client is None
        self._http_client: Transport = http_client or create_http_client(timeout, user_agent)
        self._interpreter = ResponseInterpreter()

        logger.info(
            "Initialized KairosDB client",
            base_url=self._base_url,
            retry_count=self._retry_count,
            timeout=timeout,
            backoff_seconds=backoff_seconds,
            injected_transport=not self._owns_http_client,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[Transport] = None
    ) -> "KairosDBClient":
        """Create a client from environment-backed Settings."""
        return cls(
            settings.KAIROSDB_URL,
            retry_count=settings.KAIROSDB_RETRY_COUNT,
            http_client=http_client,
            timeout=settings.KAIROSDB_TIMEOUT,
            backoff_seconds=settings.KAIROSDB_BACKOFF_SECONDS,
            user_agent=settings.KAIROSDB_USER_AGENT,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def retry_count(self) -> int:
        with self._lock:
            return self._retry_count

    @retry_count.setter
    def retry_count(self, retry_count: int) -> None:
        value = validate_retry_count(retry_count)
        with self._lock:
            self._retry_count = value
        logger.debug("Retry count updated", retry_count=value)

    def set_retry_count(self, retry_count: int) -> None:
        """Replace the retry budget (0 = single attempt)."""
        self.retry_count = retry_count

    # === Operations ===

    def push_metrics(self, payload: MetricBatch | MetricBuilder) -> Response:
        """
        Push a batch of metrics.

        Raises:
            DeliveryExhausted: Every attempt failed at transport level
            DecodingError: The server answered with a malformed body
        """
        batch = payload.build() if isinstance(payload, MetricBuilder) else payload
        return self._execute("push_metrics", "POST", PUSH_PATH, Response, batch.to_wire())

    def query(self, payload: Query | QueryBuilder) -> QueryResponse:
        """
        Query data points.

        Raises:
            DeliveryExhausted: Every attempt failed at transport level
            DecodingError: The server answered with a malformed body
        """
        query = self._finalize_query(payload)
        return self._execute("query", "POST", QUERY_PATH, QueryResponse, query.to_wire())

    def query_tags(self, payload: Query | QueryBuilder) -> QueryResponse:
        """Query the tags of the series a query selects, without data points."""
        query = self._finalize_query(payload)
        return self._execute("query_tags", "POST", QUERY_TAGS_PATH, QueryResponse, query.to_wire())

    def delete_data_points(self, payload: Query | QueryBuilder) -> Response:
        """Delete the data points a query selects."""
        query = self._finalize_query(payload)
        return self._execute(
            "delete_data_points", "POST", DELETE_DATA_POINTS_PATH, Response, query.to_wire()
        )

    def delete_metric(self, name: str) -> Response:
        """
        Delete a metric and all its data points.

        Raises:
            InvalidInputError: name is empty
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("metric name must not be empty")
        path = DELETE_METRIC_PATH + quote(name, safe="")
        return self._execute("delete_metric", "DELETE", path, Response)

    def get_metric_names(self) -> GetResponse:
        return self._execute("get_metric_names", "GET", METRIC_NAMES_PATH, GetResponse)

    def get_tag_names(self) -> GetResponse:
        return self._execute("get_tag_names", "GET", TAG_NAMES_PATH, GetResponse)

    def get_tag_values(self) -> GetResponse:
        return self._execute("get_tag_values", "GET", TAG_VALUES_PATH, GetResponse)

    def get_version(self) -> VersionResponse:
        return self._execute("get_version", "GET", VERSION_PATH, VersionResponse)

    # === Internals ===

    @staticmethod
    def _finalize_query(payload: Query | QueryBuilder) -> Query:
        return payload.build() if isinstance(payload, QueryBuilder) else payload

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _execute(
        self,
        operation: str,
        method: str,
        path: str,
        response_type: type[R],
        body: Any = None,
    ) -> R:
        content = None
        if body is not None:
            content = json.dumps(body, separators=(",", ":")).encode("utf-8")
        url = self._base_url + path
        # The budget is read once so a concurrent setter cannot change an in-flight call
        engine = RetryEngine(self.retry_count, self._backoff_seconds)

        def attempt() -> R:
            request = httpx.Request(
                method,
                url,
                content=content,
                headers=self._headers(content is not None),
                extensions={"timeout": self._timeout.as_dict()},
            )
            response = self._http_client.send(request, stream=True)
            return self._interpreter.interpret(response, response_type)

        logger.debug(
            "Sending request",
            operation=operation,
            method=method,
            path=path,
            body_bytes=len(content) if content else 0,
            max_attempts=engine.max_attempts,
        )

        with request_latency_seconds.labels(operation=operation).time():
            try:
                result = engine.execute(attempt, operation=operation)
            except DecodingError as e:
                decoding_errors_total.labels(operation=operation).inc()
                logger.error(
                    "Malformed response body",
                    operation=operation,
                    status_code=e.status_code,
                    parse_error=e.details.get("parse_error"),
                )
                raise

        requests_total.labels(
            operation=operation, status_class=result.status_class.value
        ).inc()

        if result.is_success:
            logger.info("Request completed", operation=operation, status_code=result.status_code)
        else:
            logger.warning(
                "Request returned error status",
                operation=operation,
                status_code=result.status_code,
                errors=list(result.errors),
            )
        return result

    # === Lifecycle ===

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http_client and isinstance(self._http_client, httpx.Client):
            self._http_client.close()
            logger.debug("Closed KairosDB client connection")

    def __enter__(self) -> "KairosDBClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self._base_url}, "
            f"retry_count={self.retry_count})"
        )
