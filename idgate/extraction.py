"""Raw token extraction from an incoming request."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from idgate.exceptions import NoTokenProvidedError

TOKEN_FIELDS = ("id_token", "access_token")


def _header(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    lowered = name.lower()
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def _bearer(authorization: Any) -> Optional[str]:
    if not isinstance(authorization, str):
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip() or None


def extract_token(
    body: Optional[Mapping[str, Any]] = None,
    query: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, Any]] = None,
    header_name: Optional[str] = None,
) -> str:
    """Find the raw token in a request.

    Lookup order, first non-empty value wins:
    body ``id_token``, body ``access_token``, query ``id_token``, query
    ``access_token``, the ``header_name`` header (if given), then an
    ``Authorization: Bearer <token>`` header.

    Raises:
        NoTokenProvidedError: If no location carries a token
    """
    for source in (body, query):
        if not source:
            continue
        for name in TOKEN_FIELDS:
            value = source.get(name)
            if isinstance(value, str) and value:
                return value

    if headers:
        if header_name:
            value = _header(headers, header_name)
            if isinstance(value, str) and value:
                return value

        token = _bearer(_header(headers, "Authorization"))
        if token:
            return token

    raise NoTokenProvidedError()
