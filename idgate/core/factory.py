"""Abstract factory for creating verification components."""

from abc import ABC, abstractmethod

from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier


class IdgateFactory(ABC):
    """Abstract factory for creating verification components.

    Implementations wire a KeyResolver and a TokenVerifier for one provider
    so they work together. Once configured, the factory hands out verifiers
    that share the same resolver (and therefore the same key cache).

    Usage:
        Do not instantiate this class directly. Use create_factory() instead:

        >>> from idgate import create_factory
        >>> factory = create_factory("google", client_ids="123-456.apps.googleusercontent.com")

    See Also:
        - create_factory(): Main entry point for creating factories
        - GoogleFactory: Google id tokens
        - StaticFactory: Offline keys for testing
    """

    @abstractmethod
    def create_key_resolver(self) -> KeyResolver:
        """Create or return the cached key resolver.

        Returns:
            KeyResolver: The resolver verifiers from this factory use.
        """
        pass

    @abstractmethod
    def create_token_verifier(self) -> TokenVerifier:
        """Create a token verifier wired to this factory's key resolver.

        Returns:
            TokenVerifier: A verifier accepting this factory's client ids.

        Examples:
            >>> verifier = factory.create_token_verifier()
            >>> outcome = await verifier.verify(id_token)
            >>> if outcome.ok:
            ...     user_id = outcome.subject
        """
        pass


def create_factory(provider_type: str, **kwargs) -> IdgateFactory:
    """Create a factory for the specified provider type.

    This is the main entry point for configuring Idgate.

    Args:
        provider_type: The identity provider type to use.
            Valid values: "google", "static"

        **kwargs: Provider-specific configuration arguments.

            For provider_type="google":
                client_ids (str | list[str], required): Accepted audience values.
                key_resolver (KeyResolver, optional): Replaces the default
                    cached HTTP resolver entirely.
                use_jwks (bool, optional): Fetch the JWKS endpoint instead of
                    the PEM certificate endpoint. Defaults to False.
                timeout (float, optional): Key fetch timeout in seconds.
                cache_ttl_seconds (float, optional): Key cache TTL; 0 disables
                    caching.
                algorithms (list[str], optional): Accepted algorithms.
                clock_skew_seconds (int, optional): Expiry tolerance.

            For provider_type="static":
                client_ids (str | list[str], required): Accepted audience values.
                keys (dict, required): Mapping of kid to key material.
                algorithms, clock_skew_seconds: As above.

    Returns:
        IdgateFactory: A configured factory instance.

    Raises:
        ValueError: If provider_type is unknown or required arguments are missing.

    Examples:
        >>> factory = create_factory("google", client_ids=["web-client", "ios-client"])
        >>> verifier = factory.create_token_verifier()

        With environment variables:
            >>> import os
            >>> factory = create_factory(
            ...     "google",
            ...     client_ids=os.environ["GOOGLE_CLIENT_ID"].split(","),
            ... )
    """
    if "client_ids" not in kwargs:
        raise ValueError(
            f"Missing required argument 'client_ids' for provider_type='{provider_type}'. "
            f"Example: create_factory('{provider_type}', client_ids='my-client-id')"
        )

    if provider_type == "google":
        from idgate.factories.google import GoogleFactory

        return GoogleFactory(**kwargs)
    elif provider_type == "static":
        from idgate.factories.static import StaticFactory

        if "keys" not in kwargs:
            raise ValueError(
                "Missing required argument 'keys' for provider_type='static'. "
                "Example: create_factory('static', client_ids='client', keys={'kid': pem})"
            )
        return StaticFactory(**kwargs)
    else:
        raise ValueError(
            f"Unknown provider type: '{provider_type}'. "
            f"Valid types: 'google', 'static'. "
            f"Example: create_factory('google', client_ids='my-client-id')"
        )
