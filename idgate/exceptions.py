"""Idgate exceptions.

All exceptions inherit from IdgateError for easy catching.

Token rejections (InvalidTokenError and subclasses) say something about the
token itself. KeyResolutionError is an infrastructure failure and says nothing
about the token's legitimacy.
"""

from __future__ import annotations

from typing import Optional

from idgate.models import RejectionReason


class IdgateError(Exception):
    """Base exception for Idgate errors."""

    def __init__(self, message: str, code: str):
        self.message = message
        self.code = code
        super().__init__(message)


class NoTokenProvidedError(IdgateError):
    """Raised when a request carries no token in any accepted location."""

    reason = RejectionReason.NO_TOKEN

    def __init__(self, message: str = "No ID token"):
        super().__init__(message=message, code="NO_TOKEN")


# ==================== Token Errors ====================


class InvalidTokenError(IdgateError):
    """Base class for errors that reject a token."""

    reason: RejectionReason = RejectionReason.MALFORMED_TOKEN

    def __init__(self, message: str = "Invalid token", code: str = "INVALID_TOKEN"):
        super().__init__(message=message, code=code)


class MalformedTokenError(InvalidTokenError):
    """Raised when a token cannot be parsed."""

    reason = RejectionReason.MALFORMED_TOKEN

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message=message, code="MALFORMED_TOKEN")


class InvalidSignatureError(InvalidTokenError):
    """Raised when token signature verification fails."""

    reason = RejectionReason.SIGNATURE_INVALID

    def __init__(self, message: str = "Token signature verification failed"):
        super().__init__(message=message, code="INVALID_SIGNATURE")


class TokenExpiredError(InvalidTokenError):
    """Raised when token has expired."""

    reason = RejectionReason.TOKEN_EXPIRED

    def __init__(self, message: str = "id_token expired"):
        super().__init__(message=message, code="TOKEN_EXPIRED")


class AudienceMismatchError(InvalidTokenError):
    """Raised when the token audience matches none of the accepted client ids."""

    reason = RejectionReason.AUDIENCE_MISMATCH

    def __init__(self, audience: object = None):
        super().__init__(message="id_token clientID mismatch", code="AUDIENCE_MISMATCH")
        self.audience = audience


class InvalidIssuerError(InvalidTokenError):
    """Raised when token issuer is not accepted for the provider."""

    reason = RejectionReason.ISSUER_INVALID

    def __init__(self, issuer: Optional[str]):
        super().__init__(
            message=f"Unknown token issuer: {issuer}",
            code="INVALID_ISSUER",
        )
        self.issuer = issuer


# ==================== Infrastructure Errors ====================


class KeyResolutionError(IdgateError):
    """Raised when the signing key for a token cannot be obtained."""

    def __init__(self, kid: Optional[str], message: str, cause: Optional[BaseException] = None):
        super().__init__(message=message, code="KEY_RESOLUTION_FAILED")
        self.kid = kid
        self.cause = cause


class ApplicationVerifyError(IdgateError):
    """Raised when the application-supplied verify callback fails."""

    def __init__(self, cause: BaseException):
        super().__init__(
            message=f"Application verify callback failed: {cause}",
            code="APPLICATION_VERIFY_FAILED",
        )
        self.cause = cause
