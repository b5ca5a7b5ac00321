"""Semantic claim checks for a signature-verified payload."""

from __future__ import annotations

from typing import AbstractSet

from idgate.exceptions import AudienceMismatchError, InvalidIssuerError, TokenExpiredError
from idgate.models import TokenPayload


def validate_claims(
    payload: TokenPayload,
    accepted: AbstractSet[str],
    now: int,
    issuers: AbstractSet[str],
    leeway: int = 0,
) -> None:
    """Enforce issuer, expiry and audience on a trusted payload.

    Must only be called after the signature has been verified. Checks run in
    order (issuer, expiry, audience) and stop at the first failure.

    Args:
        payload: The verified token payload
        accepted: Client ids this application accepts as audience
        now: Current time in whole seconds since the epoch
        issuers: The provider's issuer allow-list
        leeway: Seconds of clock skew tolerated past ``exp``

    Raises:
        InvalidIssuerError: If ``iss`` is not in ``issuers``
        TokenExpiredError: If ``now >= exp + leeway`` or ``exp`` is missing
        AudienceMismatchError: If no audience value is in ``accepted``
    """
    if payload.iss not in issuers:
        raise InvalidIssuerError(payload.iss)

    if payload.exp is None:
        raise TokenExpiredError("id_token has no expiry")
    if now >= payload.exp + leeway:
        raise TokenExpiredError()

    if not any(aud in accepted for aud in payload.audiences):
        raise AudienceMismatchError(payload.aud)
