"""
Response interpretation: status classification and body decoding.
"""

from kairosdb_client.response.interpreter import (
    UNREADABLE_BODY_ERRORS,
    ResponseInterpreter,
    read_body,
)

__all__ = ["ResponseInterpreter", "read_body", "UNREADABLE_BODY_ERRORS"]
