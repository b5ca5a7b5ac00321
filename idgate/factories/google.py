"""Factory for Google id token verification."""

from typing import Iterable, Optional, Union

from idgate.core.factory import IdgateFactory
from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier
from idgate.providers import GOOGLE, GOOGLE_JWKS_URL


class GoogleFactory(IdgateFactory):
    """Factory for Google id token verification.

    By default verifiers fetch Google's PEM certificates through an
    HttpKeyResolver wrapped in a CachingKeyResolver, so concurrent
    verifications of tokens signed with the same key share one fetch.

    Args:
        client_ids: Accepted audience value(s) - your OAuth client id(s).
        key_resolver: Optional resolver replacing the default one.
        use_jwks: Use the JWKS endpoint instead of the PEM certificate one.
        timeout: Key fetch timeout in seconds.
        cache_ttl_seconds: Key cache TTL. 0 disables caching.
        algorithms: Accepted signature algorithms.
        clock_skew_seconds: Expiry tolerance in seconds.

    Examples:
        >>> factory = GoogleFactory(client_ids="123-456.apps.googleusercontent.com")
        >>> verifier = factory.create_token_verifier()
        >>> outcome = await verifier.verify(id_token)
    """

    def __init__(
        self,
        client_ids: Union[str, Iterable[str]],
        key_resolver: Optional[KeyResolver] = None,
        use_jwks: bool = False,
        timeout: float = 5.0,
        cache_ttl_seconds: float = 21600,
        algorithms: Optional[Iterable[str]] = None,
        clock_skew_seconds: int = 0,
    ):
        self.client_ids = client_ids
        self.use_jwks = use_jwks
        self.timeout = timeout
        self.cache_ttl_seconds = cache_ttl_seconds
        self.algorithms = algorithms
        self.clock_skew_seconds = clock_skew_seconds
        self._resolver: Optional[KeyResolver] = key_resolver

    def create_key_resolver(self) -> KeyResolver:
        """Create or return the cached Google key resolver.

        The resolver is shared between all verifiers from this factory.
        """
        if self._resolver is None:
            if self.use_jwks:
                from idgate.key_resolvers.jwks import JwksKeyResolver

                resolver: KeyResolver = JwksKeyResolver(url=GOOGLE_JWKS_URL, timeout=self.timeout)
            else:
                from idgate.key_resolvers.http import HttpKeyResolver

                resolver = HttpKeyResolver(url=GOOGLE.certs_url, timeout=self.timeout)

            if self.cache_ttl_seconds > 0:
                from idgate.key_resolvers.caching import CachingKeyResolver

                resolver = CachingKeyResolver(resolver, ttl_seconds=self.cache_ttl_seconds)
            self._resolver = resolver
        return self._resolver

    def create_token_verifier(self) -> TokenVerifier:
        """Create a Google id token verifier using the shared key resolver."""
        from idgate.verifier import IdTokenVerifier

        return IdTokenVerifier(
            client_ids=self.client_ids,
            key_resolver=self.create_key_resolver(),
            provider=GOOGLE,
            algorithms=self.algorithms,
            clock_skew_seconds=self.clock_skew_seconds,
        )
