"""
HTTP transport.

This module is the only place that talks to the network. It is deliberately thin:
- `RequestSpec` describes one request (method, URL, headers, optional body).
- `send()` executes it with httpx and returns the raw status/headers/body.

Design goals:
- Any HTTP response, whatever its status, is a successful transport call.
- Failures before a response exists (connect, timeout, TLS, malformed URL,
  non-ASCII header values) come back
  as `Failure(TransportError)`, never raised.
- No retries; redirects follow httpx defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

import httpx

from oauthflow.core.errors import TransportError
from oauthflow.core.result import Failure, Result, Success
from oauthflow.core.urls import Params, encode_form, strip_query, to_params


logger = logging.getLogger(__name__)

Headers = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class RequestSpec:
    """One outgoing request. Copy with `with_headers`/`with_body`; never mutate."""

    url: str
    method: str = "GET"
    params: Params = ()
    body: bytes | None = None
    headers: Headers = ()

    def with_headers(self, headers: Iterable[tuple[str, str]]) -> "RequestSpec":
        return replace(self, headers=tuple((str(k), str(v)) for k, v in headers))

    def with_body(self, body: bytes | None) -> "RequestSpec":
        return replace(self, body=body)

    def with_params(self, params: Iterable[tuple[str, str]]) -> "RequestSpec":
        return replace(self, params=to_params(params))

    def payload(self) -> bytes | None:
        """Bytes to send: the raw body if set, otherwise the form-encoded params."""
        if self.body is not None:
            return self.body
        if self.params:
            return encode_form(self.params)
        return None


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body exactly as the server sent them."""

    status_code: int
    headers: Headers
    body: bytes

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


def _transport_failure(exc: Exception) -> Failure:
    message = str(exc) or type(exc).__name__
    error = TransportError(f"{type(exc).__name__}: {message}".encode("utf-8"))
    error.__cause__ = exc
    return Failure(error)


def _execute(client: httpx.Client, spec: RequestSpec, timeout_seconds: float | None) -> httpx.Response:
    return client.request(
        spec.method,
        spec.url,
        headers=list(spec.headers),
        content=spec.payload(),
        timeout=timeout_seconds,
    )


def send(
    spec: RequestSpec,
    *,
    timeout_seconds: float | None = 15,
    client: httpx.Client | None = None,
) -> Result[RawResponse]:
    """Execute `spec` and return the raw response.

    `client` lets callers share a pooled (or mocked) `httpx.Client`; otherwise a
    short-lived client is opened for this one call.
    """
    logger.debug("HTTP %s %s", spec.method, strip_query(spec.url))
    try:
        if client is not None:
            resp = _execute(client, spec, timeout_seconds)
        else:
            with httpx.Client() as owned:
                resp = _execute(owned, spec, timeout_seconds)
    # Header values must be ASCII; httpx raises UnicodeEncodeError while building the request.
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        return _transport_failure(exc)

    logger.debug("HTTP %s %s -> %s", spec.method, strip_query(spec.url), resp.status_code)
    return Success(
        RawResponse(
            status_code=resp.status_code,
            headers=tuple(resp.headers.multi_items()),
            body=resp.content,
        )
    )
