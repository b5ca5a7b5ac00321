"""Abstract signing key resolver interface.

This module defines the interface for resolving the key that signed a token.
Verifiers receive a resolver by injection, so a caching, multi-endpoint or
fixture implementation can replace the default without touching anything else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyResolver(ABC):
    """Abstract interface for resolving signing keys by key identifier.

    Implementations:
        - HttpKeyResolver: kid -> key mapping endpoint (Google v1 certs)
        - JwksKeyResolver: JWKS document endpoint
        - CachingKeyResolver: TTL cache around another resolver
        - StaticKeyResolver: In-memory keys for testing
    """

    @abstractmethod
    async def resolve(self, kid: str) -> Any:
        """Return the signing key material for ``kid``.

        Args:
            kid: The key identifier from the token header

        Returns:
            Key material: a PEM public key or certificate, a JWK dict,
            or a loaded key object

        Raises:
            KeyResolutionError: If the transport fails, the response is not
                usable, or ``kid`` is unknown
        """
