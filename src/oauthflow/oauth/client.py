"""
OAuth2 HTTP client.

This module is the public surface:
- token acquisition (`fetch_access_token`, `fetch_refresh_token`),
- authenticated calls carrying a bearer token (`auth_get_*`, `auth_post_*`).

Every method returns a `Result`: `Success` with bytes or a decoded value, or `Failure`
with a `TransportError`, `HTTPStatusError` or `DecodeError`. Nothing is raised and
nothing is cached; the client only holds immutable settings.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

import httpx

from oauthflow.config.settings import Settings
from oauthflow.core.http import RequestSpec, send
from oauthflow.core.result import Result
from oauthflow.domain.models import AccessToken, OAuth2Config
from oauthflow.oauth.builders import (
    BodyKind,
    access_token_request,
    authenticated_request,
    refresh_token_request,
    token_request,
)
from oauthflow.oauth.responses import RAW_BODY, interpret

T = TypeVar("T")

Pairs = Iterable[tuple[str, str]]


class OAuth2Client:
    """Token handshake + authenticated requests for one OAuth2 provider config."""

    def __init__(
        self,
        settings: Settings,
        config: OAuth2Config,
        *,
        http_client: httpx.Client | None = None,
    ):
        self._settings = settings
        self._config = config
        self._http_client = http_client

    @property
    def config(self) -> OAuth2Config:
        return self._config

    def _send(self, spec: RequestSpec, target: Any = RAW_BODY) -> Result[Any]:
        raw = send(
            spec,
            timeout_seconds=self._settings.app.http_timeout_seconds,
            client=self._http_client,
        )
        return interpret(raw, target)

    # --- token endpoint ---------------------------------------------------

    def fetch_access_token(self, code: str, extra_params: Pairs = ()) -> Result[AccessToken]:
        """Exchange an authorization code for an `AccessToken`."""
        url, params = access_token_request(self._config, code, extra_params)
        return self.do_json_post_request(url, params, AccessToken)

    def fetch_refresh_token(self, refresh_token: str, extra_params: Pairs = ()) -> Result[AccessToken]:
        """Exchange a refresh token for a new `AccessToken`."""
        url, params = refresh_token_request(self._config, refresh_token, extra_params)
        return self.do_json_post_request(url, params, AccessToken)

    def do_json_post_request(self, url: str, params: Pairs, target: Any = Any) -> Result[Any]:
        """Unauthenticated form POST, decoded as JSON into `target`."""
        return self._send(self._token_spec(url, params), target)

    def do_simple_post_request(self, url: str, params: Pairs) -> Result[bytes]:
        """Unauthenticated form POST, raw body bytes."""
        return self._send(self._token_spec(url, params))

    def _token_spec(self, url: str, params: Pairs) -> RequestSpec:
        return token_request(url, params, user_agent=self._settings.app.user_agent)

    # --- authenticated calls ----------------------------------------------

    def _auth_spec(
        self,
        token: AccessToken,
        url: str,
        *,
        method: str,
        params: Pairs = (),
        body_kind: BodyKind = BodyKind.FORM,
        body: bytes | None = None,
    ) -> RequestSpec:
        return authenticated_request(
            token,
            url,
            method=method,
            params=params,
            body_kind=body_kind,
            body=body,
            user_agent=self._settings.app.user_agent,
        )

    def auth_get_bytes(self, token: AccessToken, url: str) -> Result[bytes]:
        return self._send(self._auth_spec(token, url, method="GET"))

    def auth_get_json(self, token: AccessToken, url: str, target: Any = Any) -> Result[Any]:
        return self._send(self._auth_spec(token, url, method="GET"), target)

    def auth_post_bytes(self, token: AccessToken, url: str, params: Pairs = ()) -> Result[bytes]:
        """POST `params` plus the token as a form body."""
        return self._send(self._auth_spec(token, url, method="POST", params=params))

    def auth_post_json(
        self, token: AccessToken, url: str, params: Pairs = (), target: Any = Any
    ) -> Result[Any]:
        return self._send(self._auth_spec(token, url, method="POST", params=params), target)

    def auth_post_bytes_with_body(
        self, token: AccessToken, url: str, params: Pairs, body: bytes
    ) -> Result[bytes]:
        """POST `body` verbatim; `params` and the token travel in the query string."""
        spec = self._auth_spec(
            token, url, method="POST", params=params, body_kind=BodyKind.RAW, body=body
        )
        return self._send(spec)

    def auth_post_json_with_body(
        self, token: AccessToken, url: str, params: Pairs, body: bytes, target: Any = Any
    ) -> Result[Any]:
        spec = self._auth_spec(
            token, url, method="POST", params=params, body_kind=BodyKind.RAW, body=body
        )
        return self._send(spec, target)
