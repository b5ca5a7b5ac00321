"""JWKS key resolver."""

from __future__ import annotations

from typing import Any, Dict

from idgate.key_resolvers.http import HttpKeyResolver
from idgate.providers import GOOGLE_JWKS_URL


class JwksKeyResolver(HttpKeyResolver):
    """Resolves signing keys from a JWKS document (``{"keys": [...]}``).

    Resolved keys are JWK dicts; the signature check loads them with the
    algorithm named in the token header.
    """

    def __init__(self, url: str = GOOGLE_JWKS_URL, timeout: float = 5.0):
        super().__init__(url=url, timeout=timeout)

    def _index_keys(self, document: Any) -> Dict[str, Any]:
        if not isinstance(document, dict) or not isinstance(document.get("keys"), list):
            raise ValueError("JWKS document must contain a 'keys' list")
        # Index keys by kid
        return {k["kid"]: k for k in document["keys"] if isinstance(k, dict) and k.get("kid")}
