"""Abstract token verifier interface.

This module defines the framework-agnostic interface application code calls.
Host framework adapters (see ``idgate.strategy``) translate its outcomes into
their own success/failure/error conventions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import structlog

from idgate.models import TokenPayload, VerificationOutcome


class TokenVerifier(ABC):
    """Abstract interface for identity token verification.

    Implementations:
        - IdTokenVerifier: provider-issued JWS id tokens
    """

    @abstractmethod
    async def verify(self, token: str) -> VerificationOutcome:
        """Verify a token and return exactly one outcome.

        Args:
            token: The raw token (without 'Bearer ' prefix)

        Returns:
            Verified, Rejected or ResolutionError. Rejections are returned,
            never raised.
        """

    @abstractmethod
    def get_unverified_claims(self, token: str) -> TokenPayload:
        """Extract claims from a token WITHOUT verifying the signature.

        WARNING: Only use this for debugging or logging purposes.
        Never trust unverified claims for authorization decisions.

        Raises:
            MalformedTokenError: If the token cannot be parsed
        """

    async def decide(
        self,
        token: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> VerificationOutcome:
        """Entry point for adapters. ``context`` is only used for logging."""
        with structlog.contextvars.bound_contextvars(**dict(context or {})):
            return await self.verify(token)
