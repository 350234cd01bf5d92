"""
Request builders.

Pure construction: nothing here touches the network or validates URLs (a malformed
URL surfaces later as a `TransportError`).

Token endpoint requests carry the client credentials as a form body. Authenticated
requests carry the bearer token twice, as the `Authorization` header and as an
`access_token` parameter, because providers disagree on which one they read.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from oauthflow.core.http import RequestSpec
from oauthflow.core.urls import Params, append_query_params, to_params
from oauthflow.domain.models import AccessToken, OAuth2Config
from oauthflow.oauth.headers import DEFAULT_USER_AGENT, apply_headers


class BodyKind(str, Enum):
    """How an authenticated POST carries its payload."""

    FORM = "form"  # params + token form-encoded as the body
    RAW = "raw"  # caller bytes as the body, params + token in the query string


def authorization_url(config: OAuth2Config, extra_params: Iterable[tuple[str, str]] = ()) -> str:
    """URL to send the resource owner to for consent (e.g. extras: scope, state)."""
    params = [
        ("client_id", config.client_id),
        ("response_type", "code"),
        ("redirect_uri", config.redirect_uri),
        *to_params(extra_params),
    ]
    return append_query_params(config.authorize_endpoint, params)


def access_token_request(
    config: OAuth2Config,
    code: str,
    extra_params: Iterable[tuple[str, str]] = (),
) -> tuple[str, Params]:
    """Return `(token_endpoint, form params)` for the authorization-code exchange."""
    params = (
        ("code", code),
        ("client_id", config.client_id),
        ("client_secret", config.client_secret),
        ("redirect_uri", config.redirect_uri),
        ("grant_type", "authorization_code"),
        *to_params(extra_params),
    )
    return config.token_endpoint, params


def refresh_token_request(
    config: OAuth2Config,
    refresh_token: str,
    extra_params: Iterable[tuple[str, str]] = (),
) -> tuple[str, Params]:
    """Return `(token_endpoint, form params)` for the refresh-token grant."""
    params = (
        ("client_id", config.client_id),
        ("client_secret", config.client_secret),
        ("grant_type", "refresh_token"),
        ("refresh_token", refresh_token),
        *to_params(extra_params),
    )
    return config.token_endpoint, params


def access_token_param(token: AccessToken) -> Params:
    return (("access_token", token.access_token),)


def append_access_token(url: str, token: AccessToken) -> str:
    return append_query_params(url, access_token_param(token))


def token_request(
    url: str,
    params: Iterable[tuple[str, str]],
    *,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RequestSpec:
    """POST `params` form-encoded, no bearer token (token endpoint calls)."""
    spec = RequestSpec(url=url, method="POST", params=to_params(params))
    return spec.with_headers(apply_headers(None, spec.headers, user_agent=user_agent))


def authenticated_request(
    token: AccessToken,
    url: str,
    *,
    method: str = "GET",
    params: Iterable[tuple[str, str]] = (),
    body_kind: BodyKind = BodyKind.FORM,
    body: bytes | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RequestSpec:
    """Build a request authorized by `token`.

    - GET: `params` and the token go into the query string.
    - POST + `BodyKind.FORM`: `params` and the token are the form body.
    - POST + `BodyKind.RAW`: `body` is sent as-is; `params` and the token go into
      the query string.
    """
    method = method.upper()
    pairs = to_params(params) + access_token_param(token)

    if method == "GET":
        spec = RequestSpec(url=append_query_params(url, pairs), method=method)
    elif body_kind is BodyKind.RAW:
        spec = RequestSpec(url=append_query_params(url, pairs), method=method, body=body or b"")
    else:
        spec = RequestSpec(url=url, method=method, params=pairs)

    return spec.with_headers(apply_headers(token, spec.headers, user_agent=user_agent))
