"""Factory for offline verification with fixed keys."""

from typing import Any, Iterable, Mapping, Optional, Union

from idgate.core.factory import IdgateFactory
from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier
from idgate.key_resolvers.static import StaticKeyResolver
from idgate.providers import GOOGLE, Provider


class StaticFactory(IdgateFactory):
    """Factory serving signing keys from memory.

    Useful for tests and local development: tokens signed with your own key
    pair verify exactly like provider tokens, without network access.
    """

    def __init__(
        self,
        client_ids: Union[str, Iterable[str]],
        keys: Mapping[str, Any],
        provider: Provider = GOOGLE,
        algorithms: Optional[Iterable[str]] = None,
        clock_skew_seconds: int = 0,
    ):
        self.client_ids = client_ids
        self.provider = provider
        self.algorithms = algorithms
        self.clock_skew_seconds = clock_skew_seconds
        self._resolver = StaticKeyResolver(keys)

    def create_key_resolver(self) -> KeyResolver:
        return self._resolver

    def create_token_verifier(self) -> TokenVerifier:
        from idgate.verifier import IdTokenVerifier

        return IdTokenVerifier(
            client_ids=self.client_ids,
            key_resolver=self._resolver,
            provider=self.provider,
            algorithms=self.algorithms,
            clock_skew_seconds=self.clock_skew_seconds,
        )
