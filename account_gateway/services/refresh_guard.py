"""Refresh‑token guard: adjudicates the outcome of refresh‑token verification.

Verification (see :func:`account_gateway.services.auth.verify_refresh_token`)
hands back three loosely‑coupled signals ``(error, user, info)``.  This module
turns them into exactly one outcome:

    ======================  =========================================
    signals                 outcome
    ======================  =========================================
    nothing at all          ``Err(NoCredential, "User not found")``
    error, or no user       ``Err(VerificationFailed, info.message)``
    user and no error       ``Ok(user)``
    ======================  =========================================

This module contains no FastAPI imports so it can be unit‑tested without an
ASGI stack; the dependency wiring lives in :pymod:`services.auth`.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol

from loguru import logger

from account_gateway.models.auth import TokenInfo, User
from account_gateway.services.errors import (
    AuthStatusCodeError,
    ClientError,
    Err,
    Ok,
    RejectionReason,
    Result,
    unauthorized,
)

COMPONENT = "RefreshTokenGuard"
OPERATION = "handle_request"

USER_NOT_FOUND = "User not found"
# used only when verification reports an error without any info object
VERIFICATION_FAILED = "Refresh token verification failed"


class ErrorLogger(Protocol):
    def __call__(
        self, message: str, *, component: str, operation: str, context: Any
    ) -> None: ...


def log_rejection(message: str, *, component: str, operation: str, context: Any) -> None:
    """Default :class:`ErrorLogger`: one structured Loguru error record."""
    payload = context.model_dump() if isinstance(context, TokenInfo) else context
    logger.bind(component=component, operation=operation, context=payload).error(message)


def classify_refresh_outcome(
    error: Optional[Any],
    user: Optional[User],
    info: Optional[TokenInfo],
    *,
    log: ErrorLogger = log_rejection,
) -> Result[User]:
    """Return ``Ok(user)`` or an ``Err`` for the verification signals.

    ``log`` is called exactly once, and only on the verification‑failed path.
    The principal is returned as given.
    """
    if user is None and error is None and info is None:
        return Err(RejectionReason.NO_CREDENTIAL, (USER_NOT_FOUND,))

    if error is not None or user is None:
        detail = info.message if info is not None else VERIFICATION_FAILED
        log(detail, component=COMPONENT, operation=OPERATION, context=info)
        return Err(RejectionReason.VERIFICATION_FAILED, (detail,))

    return Ok(user)


def as_client_error(rejection: Err) -> ClientError:
    """Both rejection kinds share one status code and message key."""
    return unauthorized(AuthStatusCodeError.AUTH_GUARD_JWT_REFRESH_TOKEN_ERROR, rejection.detail)


def handle_request(
    error: Optional[Any],
    user: Optional[User],
    info: Optional[TokenInfo],
    *,
    log: ErrorLogger = log_rejection,
) -> User:
    """Classify and either return the principal or raise :class:`ClientError`."""
    outcome = classify_refresh_outcome(error, user, info, log=log)
    if isinstance(outcome, Err):
        raise as_client_error(outcome)
    return outcome.value
