"""Idgate - identity token verification for "login with provider" flows.

Idgate decides whether a bearer id token issued by a third-party identity
provider (Google out of the box) is authentic, unexpired and addressed to
your application before you trust the identity it asserts.

Features:
- Compact JWS decoding with strict structural checks
- Pluggable signing key resolution (HTTP certs, JWKS, cached, static)
- Signature verification via PyJWT / cryptography
- Issuer, expiry and multi-client-id audience validation
- Framework-agnostic request strategy with an application verify callback
"""

from idgate.core.factory import IdgateFactory, create_factory
from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier
from idgate.decoder import decode
from idgate.extraction import extract_token
from idgate.factories import GoogleFactory, StaticFactory
from idgate.key_resolvers import (
    CachingKeyResolver,
    HttpKeyResolver,
    JwksKeyResolver,
    StaticKeyResolver,
)
from idgate.providers import GOOGLE, Provider
from idgate.strategy import AuthRequest, Error, Failure, IdTokenStrategy, Success
from idgate.verifier import IdTokenVerifier, verify
from idgate.exceptions import (
    ApplicationVerifyError,
    AudienceMismatchError,
    IdgateError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidTokenError,
    KeyResolutionError,
    MalformedTokenError,
    NoTokenProvidedError,
    TokenExpiredError,
)
from idgate.models import (
    DecodedToken,
    Rejected,
    RejectionReason,
    ResolutionError,
    TokenHeader,
    TokenPayload,
    VerificationOutcome,
    Verified,
    VerifierConfig,
)

__version__ = "0.1.0"

__all__ = [
    # Core interfaces
    "KeyResolver",
    "TokenVerifier",
    # Factory (recommended entry point)
    "create_factory",
    "IdgateFactory",
    "GoogleFactory",
    "StaticFactory",
    # Verification
    "IdTokenVerifier",
    "verify",
    "decode",
    # Providers
    "GOOGLE",
    "Provider",
    # Key Resolvers
    "CachingKeyResolver",
    "HttpKeyResolver",
    "JwksKeyResolver",
    "StaticKeyResolver",
    # Request handling
    "AuthRequest",
    "IdTokenStrategy",
    "Success",
    "Failure",
    "Error",
    "extract_token",
    # Models
    "DecodedToken",
    "TokenHeader",
    "TokenPayload",
    "VerifierConfig",
    "VerificationOutcome",
    "Verified",
    "Rejected",
    "RejectionReason",
    "ResolutionError",
    # Exceptions - Base
    "IdgateError",
    # Exceptions - Token
    "NoTokenProvidedError",
    "InvalidTokenError",
    "MalformedTokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "AudienceMismatchError",
    "InvalidIssuerError",
    # Exceptions - Infrastructure
    "KeyResolutionError",
    "ApplicationVerifyError",
]
