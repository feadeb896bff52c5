"""Outcome types shared by the guard and validator layers.

The pure decision functions return :class:`Ok` or :class:`Err`; only the HTTP
layer turns an ``Err`` into a :class:`ClientError`, which the exception handler
in :pymod:`account_gateway.main` renders verbatim as the response body.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Codes & message keys
# ---------------------------------------------------------------------------


class AuthStatusCodeError(IntEnum):
    """Machine‑readable ``statusCode`` values carried in auth error bodies."""

    AUTH_GUARD_JWT_ACCESS_TOKEN_ERROR = 5000
    AUTH_GUARD_JWT_REFRESH_TOKEN_ERROR = 5001
    AUTH_GUARD_PERMISSION_ERROR = 5010


UNAUTHORIZED_WITH_MESSAGE = "http.clientError.unauthorizedWithMessage"
FORBIDDEN_WITH_MESSAGE = "http.clientError.forbiddenWithMessage"
BAD_REQUEST = "Bad Request"


class RejectionReason(str, Enum):
    NO_CREDENTIAL = "NoCredential"
    VERIFICATION_FAILED = "VerificationFailed"
    INVALID_TAG = "InvalidTag"
    DUPLICATE_TAG = "DuplicateTag"
    DUPLICATE_ADDRESS = "DuplicateAddress"


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Violation:
    """One offending value and what is wrong with it."""

    kind: RejectionReason
    subject: str


@dataclass(frozen=True)
class Err:
    """Rejection with a reason and its human‑readable detail(s)."""

    reason: RejectionReason
    details: tuple[str, ...] = field(default_factory=tuple)
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def detail(self) -> str:
        return self.details[0] if self.details else ""


Result = Union[Ok[T], Err]


# ---------------------------------------------------------------------------
# HTTP error carrier
# ---------------------------------------------------------------------------


class ClientError(Exception):
    """Client‑fault error rendered as ``body`` with ``status_code``."""

    def __init__(self, status_code: int, body: dict[str, Any]):
        super().__init__(body)
        self.status_code = status_code
        self.body = body


def unauthorized(code: AuthStatusCodeError, detail: str) -> ClientError:
    return ClientError(
        401,
        {
            "statusCode": int(code),
            "message": UNAUTHORIZED_WITH_MESSAGE,
            "properties": {"message": detail},
        },
    )


def forbidden(detail: str) -> ClientError:
    return ClientError(
        403,
        {
            "statusCode": int(AuthStatusCodeError.AUTH_GUARD_PERMISSION_ERROR),
            "message": FORBIDDEN_WITH_MESSAGE,
            "properties": {"message": detail},
        },
    )


def bad_request(messages: list[str]) -> ClientError:
    return ClientError(400, {"message": messages, "error": BAD_REQUEST})
