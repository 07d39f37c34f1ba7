"""
Unit tests for RetryEngine.

Tests attempt counting, backoff and exhaustion with plain callables standing
in for the send-and-interpret step.
"""

from unittest.mock import MagicMock, call, patch

import httpx
import pytest

from kairosdb_client.exceptions import DecodingError, InvalidInputError
from kairosdb_client.models.responses import Response
from kairosdb_client.retry.engine import RetryEngine
from kairosdb_client.retry.exceptions import DeliveryExhausted
from kairosdb_client.retry.metadata import RetryMetadata


# ============================================================================
# Initialization
# ============================================================================


def test_retry_engine_initialization():
    engine = RetryEngine(retry_count=3)

    assert engine.retry_count == 3
    assert engine.max_attempts == 4
    assert engine.backoff_seconds == 0.0


def test_negative_retry_count_rejected():
    with pytest.raises(InvalidInputError):
        RetryEngine(retry_count=-1)


def test_negative_backoff_rejected():
    with pytest.raises(InvalidInputError):
        RetryEngine(retry_count=1, backoff_seconds=-1.0)


# ============================================================================
# Attempt Counting
# ============================================================================


@pytest.mark.parametrize("retry_count", [0, 1, 3, 10])
def test_always_failing_attempt_runs_retry_count_plus_one(retry_count):
    """For every budget n the attempt runs exactly n + 1 times."""
    attempt = MagicMock(side_effect=httpx.ConnectError("refused"))
    engine = RetryEngine(retry_count=retry_count)

    with pytest.raises(DeliveryExhausted) as exc_info:
        engine.execute(attempt, operation="push_metrics")

    assert attempt.call_count == retry_count + 1
    assert exc_info.value.retry_metadata.total_attempts == retry_count + 1
    assert exc_info.value.retry_metadata.max_attempts == retry_count + 1


def test_success_first_attempt():
    expected = Response(status_code=204)
    attempt = MagicMock(return_value=expected)
    engine = RetryEngine(retry_count=3)

    result = engine.execute(attempt)

    assert result is expected
    assert attempt.call_count == 1


def test_error_status_stops_retrying():
    """Any HTTP status, including 5xx, is a completed exchange."""
    attempt = MagicMock(return_value=Response(status_code=503))
    engine = RetryEngine(retry_count=3)

    result = engine.execute(attempt)

    assert result.status_code == 503
    assert attempt.call_count == 1


def test_success_after_transport_failures():
    attempt = MagicMock(
        side_effect=[
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            Response(status_code=200),
        ]
    )
    engine = RetryEngine(retry_count=3)

    result = engine.execute(attempt)

    assert result.status_code == 200
    assert attempt.call_count == 3


def test_decoding_error_not_retried():
    attempt = MagicMock(side_effect=DecodingError("bad body", status_code=500))
    engine = RetryEngine(retry_count=3)

    with pytest.raises(DecodingError):
        engine.execute(attempt)

    assert attempt.call_count == 1


# ============================================================================
# Exhaustion
# ============================================================================


def test_exhaustion_wraps_last_error():
    last = httpx.ReadTimeout("still slow")
    attempt = MagicMock(side_effect=[httpx.ConnectError("refused"), last])
    engine = RetryEngine(retry_count=1)

    with pytest.raises(DeliveryExhausted) as exc_info:
        engine.execute(attempt, operation="query")

    error = exc_info.value
    assert error.last_error is last
    assert error.__cause__ is last
    assert error.operation == "query"
    assert error.retry_metadata.transport_errors == ("ConnectError", "ReadTimeout")
    assert "after 2 attempts" in str(error)
    assert error.details["total_attempts"] == 2


def test_exhaustion_details_do_not_share_metadata_state():
    """Editing the error details leaves the frozen metadata unchanged."""
    attempt = MagicMock(side_effect=httpx.ConnectError("refused"))
    engine = RetryEngine(retry_count=1)

    with pytest.raises(DeliveryExhausted) as exc_info:
        engine.execute(attempt)

    error = exc_info.value
    error.details["transport_errors"].append("Injected")

    assert isinstance(error.retry_metadata.transport_errors, tuple)
    assert error.retry_metadata.transport_errors == ("ConnectError", "ConnectError")


# ============================================================================
# Backoff
# ============================================================================


def test_no_backoff_by_default():
    attempt = MagicMock(side_effect=httpx.ConnectError("refused"))
    engine = RetryEngine(retry_count=3)

    with patch("kairosdb_client.retry.engine.time.sleep") as mock_sleep:
        with pytest.raises(DeliveryExhausted):
            engine.execute(attempt)

    mock_sleep.assert_not_called()


def test_exponential_backoff_between_attempts():
    """Delays double per attempt and none follows the last attempt."""
    attempt = MagicMock(side_effect=httpx.ConnectError("refused"))
    engine = RetryEngine(retry_count=3, backoff_seconds=0.5)

    with patch("kairosdb_client.retry.engine.time.sleep") as mock_sleep:
        with pytest.raises(DeliveryExhausted):
            engine.execute(attempt)

    assert mock_sleep.call_args_list == [call(0.5), call(1.0), call(2.0)]


def test_backoff_for():
    engine = RetryEngine(retry_count=3, backoff_seconds=2.0)

    assert engine.backoff_for(1) == 2.0
    assert engine.backoff_for(2) == 4.0
    assert engine.backoff_for(3) == 8.0


# ============================================================================
# RetryMetadata
# ============================================================================


def test_retry_metadata_invariants():
    with pytest.raises(ValueError, match="total_attempts must be >= 1"):
        RetryMetadata(total_attempts=0, max_attempts=1)

    with pytest.raises(ValueError, match="must not exceed"):
        RetryMetadata(total_attempts=3, max_attempts=2)

    with pytest.raises(ValueError, match="more transport errors"):
        RetryMetadata(total_attempts=1, max_attempts=1, transport_errors=("A", "B"))

    with pytest.raises(ValueError, match="total_latency_ms"):
        RetryMetadata(total_attempts=1, max_attempts=1, total_latency_ms=-1)
