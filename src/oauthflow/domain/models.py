"""
Domain models (Pydantic).

These types are the stable contract between the embedding application and the library:
- `OAuth2Config`: client credentials + provider endpoints (supplied by the caller)
- `AccessToken`: the decoded token-endpoint response

Both are frozen: they are passed into every call and never mutated.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OAuth2Config(BaseModel):
    """Client credentials and provider endpoints for one OAuth2 application."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    authorize_endpoint: str
    token_endpoint: str
    redirect_uri: str


class AccessToken(BaseModel):
    """Token-endpoint response.

    Field names follow RFC 6749 §5.1. Providers differ on which optional fields they
    return, so everything but `access_token` may be missing; unknown fields are ignored.
    `expires_in` is informational only; nothing here enforces expiry.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(..., min_length=1)
    token_type: str | None = None
    expires_in: int | float | None = None
    refresh_token: str | None = None
    scope: str | None = None
    id_token: str | None = None

    @field_validator("scope", mode="before")
    @classmethod
    def _join_scope_list(cls, value: Any) -> Any:
        # Some providers return scopes as a JSON array instead of a space-delimited string.
        if isinstance(value, (list, tuple)):
            return " ".join(str(item) for item in value)
        return value

    def to_json(self) -> str:
        """Serialize without the fields the provider did not send."""
        return self.model_dump_json(exclude_none=True)
