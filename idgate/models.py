"""Token verification models - provider-agnostic data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union


class RejectionReason(str, Enum):
    """Why a token was rejected."""

    NO_TOKEN = "NO_TOKEN"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    AUDIENCE_MISMATCH = "AUDIENCE_MISMATCH"
    ISSUER_INVALID = "ISSUER_INVALID"


@dataclass(frozen=True)
class TokenHeader:
    """Unverified JOSE header. Only used to pick a key and an algorithm."""

    kid: str
    alg: str
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by a token.

    Untrusted until the signature has been verified. Provider-specific
    claims (email, hd, picture, ...) are reachable through ``raw`` or
    item access.
    """

    sub: Optional[str]
    aud: Union[str, list, None]
    iss: Optional[str]
    exp: Optional[int]
    iat: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def audiences(self) -> Tuple[str, ...]:
        if self.aud is None:
            return ()
        if isinstance(self.aud, str):
            return (self.aud,)
        return tuple(self.aud)

    def get(self, name: str, default: Any = None) -> Any:
        return self.raw.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.raw[name]

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "TokenPayload":
        return cls(
            sub=claims.get("sub"),
            aud=claims.get("aud"),
            iss=claims.get("iss"),
            exp=claims.get("exp"),
            iat=claims.get("iat"),
            raw=dict(claims),
        )


@dataclass(frozen=True)
class DecodedToken:
    """A structurally valid token split into its parts."""

    header: TokenHeader
    payload: TokenPayload
    signature: bytes
    signing_input: bytes  # exact "<header>.<payload>" bytes covered by the signature


# ==================== Outcomes ====================


@dataclass(frozen=True)
class Verified:
    """The token is authentic, unexpired and addressed to this application."""

    payload: TokenPayload
    ok: bool = field(default=True, init=False)
    kind: str = field(default="verified", init=False)

    @property
    def subject(self) -> Optional[str]:
        return self.payload.sub


@dataclass(frozen=True)
class Rejected:
    """The token was refused. ``message`` is for logs and operators."""

    reason: RejectionReason
    message: str
    ok: bool = field(default=False, init=False)
    kind: str = field(default="rejected", init=False)


@dataclass(frozen=True)
class ResolutionError:
    """The signing key could not be obtained; nothing is known about the token."""

    cause: Exception
    ok: bool = field(default=False, init=False)
    kind: str = field(default="resolution_error", init=False)


VerificationOutcome = Union[Verified, Rejected, ResolutionError]


# ==================== Configuration ====================


def _normalise_client_ids(client_ids: Union[str, Iterable[str]]) -> FrozenSet[str]:
    if isinstance(client_ids, str):
        ids = frozenset([client_ids])
    else:
        ids = frozenset(client_ids)
    if not ids:
        raise ValueError("At least one client id is required")
    for client_id in ids:
        if not isinstance(client_id, str) or not client_id:
            raise ValueError(f"Client ids must be non-empty strings, got {client_id!r}")
    return ids


@dataclass(frozen=True)
class VerifierConfig:
    """Immutable configuration of a verifier instance.

    Args:
        client_ids: One client id or an iterable of accepted client ids.
        algorithms: Signature algorithms accepted in the token header.
        clock_skew_seconds: Tolerance added to ``exp`` when checking expiry.
    """

    client_ids: FrozenSet[str]
    algorithms: Tuple[str, ...] = ("RS256",)
    clock_skew_seconds: int = 0

    def __init__(
        self,
        client_ids: Union[str, Iterable[str]],
        algorithms: Optional[Iterable[str]] = None,
        clock_skew_seconds: int = 0,
    ):
        algs = tuple(algorithms) if algorithms is not None else ("RS256",)
        if not algs:
            raise ValueError("At least one signature algorithm is required")
        if any(alg.lower() == "none" for alg in algs):
            raise ValueError("The 'none' algorithm cannot be accepted")
        if clock_skew_seconds < 0:
            raise ValueError("clock_skew_seconds must not be negative")

        object.__setattr__(self, "client_ids", _normalise_client_ids(client_ids))
        object.__setattr__(self, "algorithms", algs)
        object.__setattr__(self, "clock_skew_seconds", int(clock_skew_seconds))
