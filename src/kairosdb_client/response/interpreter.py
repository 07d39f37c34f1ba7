"""
Response interpreter: turns one HTTP exchange into a typed Response.

Reading and decoding are split in two steps:

1. read_body() drains the (streamed) httpx.Response. A read fault on an
   advertised body is not an error: it yields None, meaning "no details".
2. decode() is a pure function of (status_code, body) and the target
   Response type. Status classification picks the shape the body is decoded
   as; malformed bodies raise DecodingError.
"""

import json
from typing import Any, Optional, TypeVar

import httpx
import pydantic
import structlog

from kairosdb_client.exceptions import DecodingError
from kairosdb_client.models.enums import StatusClass
from kairosdb_client.models.responses import ErrorEnvelope, Response

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=Response)

# Faults raised while reading a body the server advertised but did not deliver
UNREADABLE_BODY_ERRORS: tuple[type[Exception], ...] = (
    httpx.ReadError,
    httpx.ReadTimeout,
    httpx.RemoteProtocolError,
)


def read_body(response: httpx.Response) -> Optional[bytes]:
    """
    Read the full body of a response and close it.

    Returns:
        The body bytes (possibly empty), or None if reading failed.
    """
    try:
        return response.read()
    except UNREADABLE_BODY_ERRORS as e:
        logger.warning(
            "Response body could not be read, continuing without error details",
            status_code=response.status_code,
            error_type=type(e).__name__,
            error=str(e),
        )
        return None
    finally:
        response.close()


class ResponseInterpreter:
    """
    Builds Response objects from raw exchanges.

    The interpreter holds no state, so one instance is shared by every call
    of a client.
    """

    def interpret(self, response: httpx.Response, response_type: type[R]) -> R:
        """Read the body of an httpx response and decode it into response_type."""
        return self.decode(response.status_code, read_body(response), response_type)

    def decode(self, status_code: int, body: Optional[bytes], response_type: type[R]) -> R:
        """
        Decode a raw exchange.

        Args:
            status_code: HTTP status of the exchange
            body: Body bytes, or None when the body was unreadable
            response_type: Response subclass of the operation

        Returns:
            A response_type instance; errors are empty on success

        Raises:
            DecodingError: If the body is readable but not valid for its status
        """
        status_class = StatusClass.from_status_code(status_code)
        data = self._parse_json(status_code, body)

        if status_class.is_success:
            return self._validate(
                response_type,
                {**data, "status_code": status_code, "errors": ()},
                status_code,
                body,
            )

        envelope = self._validate(ErrorEnvelope, data, status_code, body)
        if envelope.errors:
            logger.debug(
                "Decoded error envelope",
                status_code=status_code,
                status_class=status_class.value,
                errors_count=len(envelope.errors),
            )
        return response_type(status_code=status_code, errors=envelope.errors)

    def _parse_json(self, status_code: int, body: Optional[bytes]) -> dict[str, Any]:
        if body is None or not body.strip():
            return {}

        try:
            parsed = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodingError(
                f"Failed to parse response body as JSON (status {status_code})",
                status_code=status_code,
                raw_content=_snippet(body),
                parse_error=str(e),
            ) from e

        if not isinstance(parsed, dict):
            raise DecodingError(
                f"Response body is not a JSON object (got {type(parsed).__name__})",
                status_code=status_code,
                raw_content=_snippet(body),
                parse_error=f"Expected dict, got {type(parsed).__name__}",
            )
        return parsed

    def _validate(self, model: type[Any], data: dict[str, Any], status_code: int, body: Optional[bytes]) -> Any:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise DecodingError(
                f"Response body does not match {model.__name__} (status {status_code})",
                status_code=status_code,
                raw_content=_snippet(body),
                parse_error=str(e),
            ) from e


def _snippet(body: Optional[bytes]) -> Optional[str]:
    if body is None:
        return None
    return body[:500].decode("utf-8", errors="replace")
