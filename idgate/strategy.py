"""Authentication strategy adapter.

Maps verification outcomes onto the success / failure / error convention
used by request authentication middleware, then hands the trusted payload to
an application-supplied callback that decides who the user is.

The adapter is framework-agnostic: host frameworks fill in an AuthRequest
and translate the AuthResult into their own response handling.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from idgate.core.token_verifier import TokenVerifier
from idgate.exceptions import ApplicationVerifyError, IdgateError, NoTokenProvidedError
from idgate.extraction import extract_token
from idgate.models import Rejected, RejectionReason, ResolutionError

log = structlog.get_logger()

PUBLIC_FAILURE_MESSAGE = "Invalid credential"


@dataclass
class AuthRequest:
    """The parts of an HTTP request a token can be carried in."""

    body: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Success:
    user: Any
    info: Any = None


@dataclass(frozen=True)
class Failure:
    """Authentication refused.

    ``message`` is meant for logs and operators. ``public_message`` is what
    should reach the end caller.
    """

    message: str
    reason: Optional[RejectionReason] = None
    public_message: str = PUBLIC_FAILURE_MESSAGE


@dataclass(frozen=True)
class Error:
    """System-level failure, distinct from a rejected credential."""

    exception: IdgateError


AuthResult = Union[Success, Failure, Error]


class IdTokenStrategy:
    """Authenticates requests carrying a provider id token.

    The ``verify_callback`` receives the trusted payload and the subject
    identifier (and the request first, when ``pass_request`` is set). It may
    be a plain function or a coroutine function and returns ``(user, info)``
    or just ``user``. A falsy user means "no such user" and becomes a Failure
    carrying ``info["message"]``.

    Example:
        >>> async def find_user(payload, subject):
        ...     user = await users.get_by_provider_id(subject)
        ...     return user, {"scope": "read"}
        >>> strategy = IdTokenStrategy(verifier, find_user)
        >>> result = await strategy.authenticate(AuthRequest(query=request.args))
    """

    name = "id-token"

    def __init__(
        self,
        verifier: TokenVerifier,
        verify_callback: Callable[..., Any],
        header_name: Optional[str] = None,
        pass_request: bool = False,
    ):
        if verify_callback is None:
            raise ValueError("IdTokenStrategy requires a verify callback")
        self.verifier = verifier
        self.verify_callback = verify_callback
        self.header_name = header_name
        self.pass_request = pass_request

    async def authenticate(self, request: AuthRequest) -> AuthResult:
        try:
            token = extract_token(
                body=request.body,
                query=request.query,
                headers=request.headers,
                header_name=self.header_name,
            )
        except NoTokenProvidedError as e:
            log.info("authentication_failed", reason=e.reason.value)
            return Failure(message=e.message, reason=e.reason)

        outcome = await self.verifier.decide(token, context={"strategy": self.name})

        if isinstance(outcome, Rejected):
            log.info("authentication_failed", reason=outcome.reason.value, error=outcome.message)
            return Failure(message=outcome.message, reason=outcome.reason)
        if isinstance(outcome, ResolutionError):
            return Error(exception=outcome.cause)

        payload = outcome.payload
        args = (request, payload, payload.sub) if self.pass_request else (payload, payload.sub)
        try:
            result = self.verify_callback(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            log.error("verify_callback_failed", sub=payload.sub, error=str(e))
            return Error(exception=ApplicationVerifyError(e))

        if isinstance(result, tuple):
            user, info = result if len(result) == 2 else (result[0], None)
        else:
            user, info = result, None

        if not user:
            if isinstance(info, Mapping):
                message = info.get("message") or "User not found"
            else:
                message = str(info) if info else "User not found"
            log.info("authentication_failed", sub=payload.sub, error=message)
            return Failure(message=message)

        return Success(user=user, info=info)
