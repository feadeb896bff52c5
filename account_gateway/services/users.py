"""User store backed by a YAML file.

Reads ``settings.USER_STORE_FILE`` on first access (with naïve mtime caching)
and writes it back after every mutation.  A missing file is an empty store.

File layout::

    users:
      - id: "64f0c0ffee"
        email: alice@example.com
        permissions: ["email:verified"]
        tags:
          - {id: "t-exchange", name: exchange}
        favoriteWalletAddresses:
          - {walletAddress: "0xabc", tags: ["t-exchange"]}
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from account_gateway.config import settings
from account_gateway.models.auth import User

# ---------------------------------------------------------------------------
# Cache state
# ---------------------------------------------------------------------------

_LOCK = threading.RLock()
_CACHE: Dict[str, User] = {}
_CACHE_KEY: tuple[str, int] | None = None  # (resolved path, mtime_ns)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UserStoreError(RuntimeError):
    """Raised when the YAML cannot be parsed, validated or written."""


class UserNotFoundError(RuntimeError):
    """Requested user does not exist in the store."""


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def _store_path() -> Path:
    return Path(settings.USER_STORE_FILE).resolve()


def _load() -> Dict[str, User]:
    """(Re)load YAML file, return mapping id → User."""
    global _CACHE_KEY  # noqa: PLW0603

    path = _store_path()
    try:
        mtime = path.stat().st_mtime_ns
    except FileNotFoundError:
        mtime = -1

    with _LOCK:
        if _CACHE_KEY == (str(path), mtime):
            return _CACHE  # still fresh

        users: Dict[str, User] = {}
        if mtime >= 0:
            logger.debug("Reloading user store from {}", path)
            try:
                raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as exc:
                raise UserStoreError(f"YAML syntax error in {path}: {exc}") from exc

            for entry in raw.get("users", []):
                try:
                    user = User.model_validate(entry)
                except ValidationError as exc:
                    raise UserStoreError(f"Invalid user entry in store: {exc}") from exc
                users[user.id] = user

        _CACHE.clear(); _CACHE.update(users)  # noqa: E702
        _CACHE_KEY = (str(path), mtime)
        return _CACHE


def _save(users: Dict[str, User]) -> None:
    """Write *users* to disk, then make them the cached view.

    The cache is left untouched when the write fails.
    """
    global _CACHE_KEY  # noqa: PLW0603

    path = _store_path()
    doc = {"users": [u.model_dump(mode="json", by_alias=True) for u in users.values()]}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(doc, sort_keys=False), encoding="utf-8")
    except OSError as exc:
        raise UserStoreError(f"Cannot write user store {path}: {exc}") from exc

    _CACHE.clear(); _CACHE.update(users)  # noqa: E702
    _CACHE_KEY = (str(path), path.stat().st_mtime_ns)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def get_user(user_id: str) -> Optional[User]:  # noqa: D401
    """Return **User** or ``None``."""
    return _load().get(user_id)


def get_user_with_tags(user_id: str) -> User:
    """Return the user with their tag relations; raise if unknown."""
    user = get_user(user_id)
    if user is None:
        raise UserNotFoundError(f"Unknown user: {user_id}")
    return user


def save_user(user: User) -> User:
    """Insert or replace *user* as a whole."""
    with _LOCK:
        _save({**_load(), user.id: user})
    return user


def update(user_id: str, changes: BaseModel | dict[str, Any]) -> User:
    """Apply the fields present in *changes* and persist.

    Unset fields and explicit ``None`` values leave the stored value untouched.
    """
    if isinstance(changes, BaseModel):
        fields = changes.model_dump(exclude_unset=True)
    else:
        fields = dict(changes)
    fields = {k: v for k, v in fields.items() if v is not None}

    with _LOCK:
        users = _load()
        current = users.get(user_id)
        if current is None:
            raise UserNotFoundError(f"Unknown user: {user_id}")
        try:
            updated = User.model_validate({**current.model_dump(), **fields})
        except ValidationError as exc:
            raise UserStoreError(f"Update produced an invalid user: {exc}") from exc
        _save({**users, user_id: updated})

    logger.debug("Updated user={} fields={}", user_id, sorted(fields))
    return updated


def format_and_update(user_id: str, changes: BaseModel) -> User:
    """Trim free‑text fields, then :func:`update`."""
    fields = {k: _strip(v) for k, v in changes.model_dump(exclude_unset=True).items()}
    if isinstance(fields.get("email"), str):
        fields["email"] = fields["email"].lower()
    return update(user_id, fields)


def add_permission(user_id: str, permission: str) -> User:
    """Grant *permission* (idempotent) and return the updated user."""
    with _LOCK:
        user = get_user_with_tags(user_id)
        if permission in user.permissions:
            return user
        return update(user_id, {"permissions": [*user.permissions, permission]})
