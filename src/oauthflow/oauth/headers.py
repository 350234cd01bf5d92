"""
Header policy applied to every outgoing request.

The policy headers always win: any header already on the request with the same
name (case-insensitive) is dropped, and the policy headers come first.
"""

from __future__ import annotations

from typing import Iterable

from oauthflow.domain.models import AccessToken

DEFAULT_USER_AGENT = "oauthflow"


def policy_headers(
    token: AccessToken | None,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
) -> list[tuple[str, str]]:
    """Return the fixed header set, plus `Authorization` when a token is given."""
    headers: list[tuple[str, str]] = []
    if token is not None:
        headers.append(("Authorization", f"Bearer {token.access_token}"))
    headers.extend(
        [
            ("User-Agent", user_agent),
            ("Accept", "application/json"),
            ("Content-Type", "application/json"),
        ]
    )
    return headers


def apply_headers(
    token: AccessToken | None,
    headers: Iterable[tuple[str, str]] = (),
    *,
    user_agent: str = DEFAULT_USER_AGENT,
) -> tuple[tuple[str, str], ...]:
    """Merge the policy headers onto `headers`, replacing same-named entries."""
    policy = policy_headers(token, user_agent=user_agent)
    taken = {name.lower() for name, _ in policy}
    # A stale bearer header must not survive an unauthenticated call.
    taken.add("authorization")
    rest = [(name, value) for name, value in headers if name.lower() not in taken]
    return tuple(policy + rest)
