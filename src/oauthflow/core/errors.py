"""
Error values carried by failed results.

Every error holds the diagnostic bytes that explain it (a response body with a
label in front, or the transport's own message). They are exceptions so that
`Result.unwrap()` can raise them, but the library itself never raises them.
"""

from __future__ import annotations


class OAuth2Error(Exception):
    """Base class for OAuth2 request failures."""

    def __init__(self, payload: bytes):
        if not payload:
            raise ValueError("OAuth2Error payload must not be empty")
        super().__init__(payload.decode("utf-8", errors="replace"))
        self.payload = bytes(payload)


class TransportError(OAuth2Error):
    """No HTTP response was obtained (connection refused, timeout, TLS, bad URL)."""


class HTTPStatusError(OAuth2Error):
    """A response arrived but its status was not 200."""

    def __init__(self, payload: bytes, *, status_code: int):
        super().__init__(payload)
        self.status_code = int(status_code)


class DecodeError(OAuth2Error):
    """Status 200, but the body did not decode into the expected shape."""
