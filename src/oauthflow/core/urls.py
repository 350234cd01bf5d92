"""
URL/query helpers.

These only append ordered pairs onto whatever query string a URL already has;
parsing and validation are left to the transport.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlencode, urlsplit, urlunsplit


Params = tuple[tuple[str, str], ...]


def to_params(pairs: Iterable[tuple[str, str]] | None) -> Params:
    """Normalize caller-supplied pairs (list, tuple, dict items) into an ordered tuple."""
    if not pairs:
        return ()
    return tuple((str(k), str(v)) for k, v in pairs)


def append_query_params(url: str, pairs: Iterable[tuple[str, str]]) -> str:
    """Return `url` with `pairs` appended to its query string (existing params are kept)."""
    params = to_params(pairs)
    if not params:
        return url
    encoded = urlencode(params)
    base, sep, fragment = url.partition("#")
    joiner = "&" if "?" in base else "?"
    if base.endswith(("?", "&")):
        joiner = ""
    out = f"{base}{joiner}{encoded}"
    return f"{out}{sep}{fragment}" if sep else out


def encode_form(pairs: Iterable[tuple[str, str]]) -> bytes:
    """Serialize pairs as an `application/x-www-form-urlencoded` body."""
    return urlencode(to_params(pairs)).encode("ascii")


def strip_query(url: str) -> str:
    """Drop query and fragment so URLs can be logged without credentials."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url.split("?", 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
