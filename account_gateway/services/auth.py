"""Token handling for the account gateway.

Every protected request carries a **Bearer** JWT (HS256) in the
``Authorization`` header.  Two kinds exist, distinguished by the ``typ``
claim and signed with different secrets:

    * ``access``  – checked by :func:`get_current_user` on ordinary routes;
    * ``refresh`` – checked by :func:`get_refresh_user` on ``/auth/refresh``.

Refresh verification deliberately reports *three* signals instead of raising;
:mod:`account_gateway.services.refresh_guard` decides what they mean.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, ExpiredSignatureError, JWTError
from loguru import logger

from account_gateway.config import settings
from account_gateway.models.auth import TokenInfo, User
from account_gateway.services import refresh_guard, users
from account_gateway.services.errors import AuthStatusCodeError, ClientError, unauthorized

TokenKind = Literal["access", "refresh"]

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

_JWT_ALGO = "HS256"


def _secret(kind: TokenKind) -> str:
    return settings.JWT_REFRESH_SECRET if kind == "refresh" else settings.JWT_SECRET


def _ttl(kind: TokenKind) -> int:
    return settings.REFRESH_TOKEN_TTL_SEC if kind == "refresh" else settings.ACCESS_TOKEN_TTL_SEC


# ---------------------------------------------------------------------------
# Security scheme for FastAPI docs
# ---------------------------------------------------------------------------

_bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer_scheme)]


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def create_token(user: User, *, kind: TokenKind = "access", ttl_sec: int | None = None) -> str:  # noqa: D401
    """Issue a simple HS256 token of *kind* for *user*."""
    ttl = ttl_sec if ttl_sec is not None else _ttl(kind)
    payload = {
        "sub": user.id,
        "typ": kind,
        "exp": int(datetime.now(tz=timezone.utc).timestamp() + ttl),
    }
    return jwt.encode(payload, _secret(kind), algorithm=_JWT_ALGO)


async def get_current_user(creds: BearerCredentials) -> User:  # noqa: D401
    """FastAPI dependency that validates an access JWT and returns a :class:`User`."""

    def _reject(detail: str) -> ClientError:
        return unauthorized(AuthStatusCodeError.AUTH_GUARD_JWT_ACCESS_TOKEN_ERROR, detail)

    if creds is None:
        raise _reject("Missing access token")

    try:
        payload = jwt.decode(creds.credentials, _secret("access"), algorithms=[_JWT_ALGO])
    except ExpiredSignatureError as exc:
        raise _reject("jwt expired") from exc
    except JWTError as exc:
        raise _reject("Invalid access token") from exc

    if payload.get("typ") != "access":
        raise _reject("Invalid token type")

    user = users.get_user(str(payload.get("sub", "")))
    if user is None:
        raise _reject("User not found")
    return user


def verify_refresh_token(
    token: Optional[str],
) -> tuple[Optional[Exception], Optional[User], Optional[TokenInfo]]:
    """Verify a refresh JWT and report ``(error, user, info)``.

    * no token, or a token for an unknown subject → all three ``None``;
    * undecodable, expired or wrong‑type token → ``info`` only;
    * the user store failing → ``error`` plus ``info``;
    * success → ``user`` only.
    """
    if not token:
        return None, None, None

    try:
        payload: dict[str, Any] = jwt.decode(token, _secret("refresh"), algorithms=[_JWT_ALGO])
    except ExpiredSignatureError:
        return None, None, TokenInfo(message="jwt expired")
    except JWTError:
        return None, None, TokenInfo(message="invalid token")

    if payload.get("typ") != "refresh":
        return None, None, TokenInfo(message="invalid token type")

    subject = payload.get("sub")
    if not subject:
        return None, None, TokenInfo(message="invalid token subject")

    try:
        user = users.get_user(str(subject))
    except users.UserStoreError as exc:
        logger.debug("User lookup failed during refresh: {}", exc)
        return exc, None, TokenInfo(message="Unable to load user")

    return None, user, None


async def get_refresh_user(creds: BearerCredentials) -> User:  # noqa: D401
    """FastAPI dependency guarding refresh endpoints."""
    error, user, info = verify_refresh_token(creds.credentials if creds else None)
    return refresh_guard.handle_request(error, user, info)
