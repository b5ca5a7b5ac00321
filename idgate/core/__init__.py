"""Core abstractions for Idgate token verification."""

from idgate.core.factory import IdgateFactory, create_factory
from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier

__all__ = [
    "KeyResolver",
    "TokenVerifier",
    "IdgateFactory",
    "create_factory",
]
