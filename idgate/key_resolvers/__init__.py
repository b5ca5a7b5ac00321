"""Key resolver implementations for signing key lookup."""

from idgate.key_resolvers.caching import CachingKeyResolver
from idgate.key_resolvers.http import HttpKeyResolver
from idgate.key_resolvers.jwks import JwksKeyResolver
from idgate.key_resolvers.static import StaticKeyResolver

__all__ = [
    "CachingKeyResolver",
    "HttpKeyResolver",
    "JwksKeyResolver",
    "StaticKeyResolver",
]
