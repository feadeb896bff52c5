"""Permission flags and the route‑level permission guard."""
from __future__ import annotations

from typing import Callable, Iterable

from fastapi import Depends
from loguru import logger

from account_gateway.models.auth import User
from account_gateway.services.auth import get_current_user
from account_gateway.services.errors import forbidden

ONBOARDED = "onboarded"
EMAIL_VERIFIED = "email:verified"
ACCESS_STUDIO = "access:studio"


def is_onboarded(permissions: Iterable[str]) -> bool:
    return ONBOARDED in set(permissions)


def require_permissions(*required: str) -> Callable[..., User]:
    """Build a dependency that returns the caller only if it holds every flag."""

    async def _guard(user: User = Depends(get_current_user)) -> User:
        missing = [p for p in required if p not in user.permissions]
        if missing:
            logger.debug("Permission denied: user={} missing={}", user.id, missing)
            raise forbidden(f"Missing permission: {missing[0]}")
        return user

    return _guard
