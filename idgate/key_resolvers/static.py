"""In-memory key resolver for tests and offline use.

No network access required.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from idgate.core.key_resolver import KeyResolver
from idgate.exceptions import KeyResolutionError


class StaticKeyResolver(KeyResolver):
    """Serves signing keys from a fixed mapping.

    Example:
        >>> resolver = StaticKeyResolver({"test-kid": public_key_pem})
        >>> key = await resolver.resolve("test-kid")
    """

    def __init__(self, keys: Optional[Mapping[str, Any]] = None):
        self._keys: Dict[str, Any] = dict(keys or {})

    async def resolve(self, kid: str) -> Any:
        key = self._keys.get(kid)
        if not key:
            raise KeyResolutionError(kid, f"Signing key not found for kid: {kid}")
        return key
