"""Identity token verifier.

Sequences the verification of a provider-issued id token:
- Decode the compact JWS (no I/O)
- Resolve the signing key by ``kid`` (the only suspending step)
- Verify the signature with the resolved key
- Validate issuer, expiry and audience on the now-trusted payload

Each step runs only if the previous one succeeded. Component errors are
mapped to a single VerificationOutcome here and nowhere else.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, Optional, Union

import structlog

from idgate.claims import validate_claims
from idgate.core.key_resolver import KeyResolver
from idgate.core.token_verifier import TokenVerifier
from idgate.decoder import decode
from idgate.exceptions import InvalidTokenError, KeyResolutionError
from idgate.key_resolvers.http import HttpKeyResolver
from idgate.models import (
    Rejected,
    ResolutionError,
    TokenPayload,
    VerificationOutcome,
    Verified,
    VerifierConfig,
)
from idgate.providers import GOOGLE, Provider
from idgate.signature import verify_signature

log = structlog.get_logger()


class IdTokenVerifier(TokenVerifier):
    """Verifier for provider-issued id tokens.

    Holds only immutable configuration, so one instance can serve concurrent
    ``verify`` calls.

    Args:
        client_ids: Accepted audience value(s) - one client id or several.
        key_resolver: Resolver for signing keys. Defaults to a new
            HttpKeyResolver for the provider's certificate endpoint.
        provider: Provider descriptor carrying the issuer allow-list.
            Defaults to Google.
        algorithms: Accepted signature algorithms. Defaults to ["RS256"].
        clock_skew_seconds: Tolerance past ``exp``. Defaults to 0.
        clock: Wall clock returning seconds since the epoch.
    """

    def __init__(
        self,
        client_ids: Union[str, Iterable[str]],
        key_resolver: Optional[KeyResolver] = None,
        provider: Provider = GOOGLE,
        algorithms: Optional[Iterable[str]] = None,
        clock_skew_seconds: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        self.config = VerifierConfig(
            client_ids=client_ids,
            algorithms=algorithms,
            clock_skew_seconds=clock_skew_seconds,
        )
        self.provider = provider
        self.key_resolver = key_resolver or HttpKeyResolver(url=provider.certs_url)
        self._clock = clock

    @property
    def client_ids(self) -> frozenset:
        return self.config.client_ids

    async def verify(self, token: str) -> VerificationOutcome:
        """Verify an id token and return Verified, Rejected or ResolutionError."""
        try:
            decoded = decode(token)
        except InvalidTokenError as e:
            log.warning("token_rejected", reason=e.reason.value, error=e.message)
            return Rejected(reason=e.reason, message=e.message)

        kid = decoded.header.kid
        try:
            key = await self.key_resolver.resolve(kid)
        except KeyResolutionError as e:
            log.error("key_resolution_failed", kid=kid, error=e.message)
            return ResolutionError(cause=e)
        except Exception as e:
            log.error("key_resolution_failed", kid=kid, error=str(e))
            return ResolutionError(
                cause=KeyResolutionError(kid, f"Key resolver failed: {e}", cause=e)
            )

        if not key:
            log.error("key_resolution_failed", kid=kid, error="empty key")
            return ResolutionError(
                cause=KeyResolutionError(kid, f"Key resolver returned no key for kid: {kid}")
            )

        try:
            verify_signature(decoded, key, self.config.algorithms)
            validate_claims(
                decoded.payload,
                accepted=self.config.client_ids,
                now=int(self._clock()),
                issuers=self.provider.issuers,
                leeway=self.config.clock_skew_seconds,
            )
        except InvalidTokenError as e:
            log.warning(
                "token_rejected",
                reason=e.reason.value,
                error=e.message,
                kid=kid,
                sub=decoded.payload.sub,
            )
            return Rejected(reason=e.reason, message=e.message)

        log.debug("token_verified", kid=kid, sub=decoded.payload.sub)
        return Verified(payload=decoded.payload)

    def get_unverified_claims(self, token: str) -> TokenPayload:
        """Extract claims from a token WITHOUT verifying the signature."""
        return decode(token).payload


async def verify(
    token: str,
    client_ids: Union[str, Iterable[str]],
    key_resolver: Optional[KeyResolver] = None,
    **crypto_options: Any,
) -> VerificationOutcome:
    """One-shot verification without keeping a verifier around.

    ``crypto_options`` are passed through to IdTokenVerifier
    (``algorithms``, ``clock_skew_seconds``, ``clock``).
    """
    verifier = IdTokenVerifier(client_ids, key_resolver=key_resolver, **crypto_options)
    return await verifier.verify(token)
