from urllib.parse import parse_qsl, urlsplit

from oauthflow.domain.models import AccessToken, OAuth2Config
from oauthflow.oauth.builders import (
    BodyKind,
    access_token_request,
    append_access_token,
    authenticated_request,
    authorization_url,
    refresh_token_request,
    token_request,
)


CONFIG = OAuth2Config(
    client_id="client-1",
    client_secret="s3cret",
    authorize_endpoint="https://example.com/authorize",
    token_endpoint="https://example.com/token",
    redirect_uri="https://app.example.com/callback",
)
TOKEN = AccessToken(access_token="tok1")


def _query(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query)


def test_access_token_request_targets_token_endpoint_with_code():
    url, params = access_token_request(CONFIG, "abc123")

    assert url == "https://example.com/token"
    assert dict(params) == {
        "code": "abc123",
        "client_id": "client-1",
        "client_secret": "s3cret",
        "redirect_uri": "https://app.example.com/callback",
        "grant_type": "authorization_code",
    }
    assert params[0] == ("code", "abc123")


def test_refresh_token_request_uses_refresh_grant_and_keeps_extras_last():
    url, params = refresh_token_request(CONFIG, "r-1", [("scope", "read")])

    assert url == CONFIG.token_endpoint
    assert ("grant_type", "refresh_token") in params
    assert ("refresh_token", "r-1") in params
    assert "code" not in dict(params)
    assert params[-1] == ("scope", "read")


def test_authorization_url_appends_standard_params():
    url = authorization_url(CONFIG, [("state", "xyz"), ("scope", "a b")])

    assert url.startswith("https://example.com/authorize?")
    assert _query(url) == [
        ("client_id", "client-1"),
        ("response_type", "code"),
        ("redirect_uri", "https://app.example.com/callback"),
        ("state", "xyz"),
        ("scope", "a b"),
    ]


def test_append_access_token_keeps_existing_query():
    url = append_access_token("https://api.example.com/me?fields=id", TOKEN)

    assert _query(url) == [("fields", "id"), ("access_token", "tok1")]


def test_token_request_is_form_post_without_bearer():
    spec = token_request(*access_token_request(CONFIG, "abc123"))
    headers = dict(spec.headers)

    assert spec.method == "POST"
    assert spec.url == "https://example.com/token"
    assert "Authorization" not in headers
    assert headers["Accept"] == "application/json"
    assert b"code=abc123" in spec.payload()
    assert b"grant_type=authorization_code" in spec.payload()


def test_authenticated_get_puts_token_in_query_and_header():
    spec = authenticated_request(TOKEN, "https://api.example.com/me", method="get")

    assert spec.method == "GET"
    assert _query(spec.url) == [("access_token", "tok1")]
    assert spec.payload() is None
    assert dict(spec.headers)["Authorization"] == "Bearer tok1"


def test_authenticated_form_post_appends_token_to_params():
    spec = authenticated_request(
        TOKEN, "https://api.example.com/items", method="POST", params=[("name", "x")]
    )

    assert spec.url == "https://api.example.com/items"
    assert spec.params == (("name", "x"), ("access_token", "tok1"))
    assert spec.payload() == b"name=x&access_token=tok1"


def test_authenticated_raw_post_sends_body_verbatim_and_token_in_query():
    spec = authenticated_request(
        TOKEN,
        "https://api.example.com/upload",
        method="POST",
        params=[("kind", "json")],
        body_kind=BodyKind.RAW,
        body=b'{"a": 1}',
    )

    assert spec.payload() == b'{"a": 1}'
    assert _query(spec.url) == [("kind", "json"), ("access_token", "tok1")]
    assert dict(spec.headers)["Authorization"] == "Bearer tok1"


def test_builders_do_not_validate_urls():
    spec = authenticated_request(TOKEN, "not a url", method="GET")

    assert spec.url.startswith("not a url")
