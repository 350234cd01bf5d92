"""
Response interpretation.

Two composable stages:
1. `handle_response`: status 200 -> body bytes; anything else -> `HTTPStatusError`.
2. `parse_response_json`: bytes -> typed value via a pydantic `TypeAdapter`.

Callers that want raw bytes stop after stage one. A failure from any earlier stage
passes through stage two untouched (same object, no re-wrapping).
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from oauthflow.core.errors import DecodeError, HTTPStatusError
from oauthflow.core.http import RawResponse
from oauthflow.core.result import Failure, Result, Success

T = TypeVar("T")

STATUS_ERROR_LABEL = b"Gaining token failed: "
DECODE_ERROR_LABEL = b"Could not decode JSON"

# Passed as `target` to stop after status classification (`None` is a valid JSON target).
RAW_BODY: Any = object()


def handle_response(raw: RawResponse) -> Result[bytes]:
    if raw.status_code == 200:
        return Success(raw.body)
    return Failure(HTTPStatusError(STATUS_ERROR_LABEL + raw.body, status_code=raw.status_code))


def decode_json(body: bytes, target: Any = Any) -> Result[Any]:
    """Decode `body` into `target` (a pydantic model, dataclass, builtin type or `Any`)."""
    try:
        return Success(TypeAdapter(target).validate_json(body))
    except (ValidationError, ValueError):
        return Failure(DecodeError(DECODE_ERROR_LABEL + body))


def parse_response_json(result: Result[bytes], target: Any = Any) -> Result[Any]:
    if isinstance(result, Failure):
        return result
    return decode_json(result.value, target)


def interpret(raw: Result[RawResponse], target: Any = RAW_BODY) -> Result[Any]:
    """Run both stages over a transport result; `target=RAW_BODY` stops after stage one."""
    body = raw.and_then(handle_response)
    if target is RAW_BODY:
        return body
    return parse_response_json(body, target)
