"""Favourite wallet address list validation.

Checks a caller‑supplied replacement list against the tags the user owns.
Entries are scanned in order and the first failing entry decides the
rejection:

    1. Tag check (per entry): every repeated tag and every tag the user does
       not own is reported, for *that entry only*.
    2. Address check (across entries): the first address seen twice is
       reported on its own.

Pure and framework‑free; the route layer fetches the tag set and converts an
``Err`` into a 400 response.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from account_gateway.models.user import FavoriteWalletAddress
from account_gateway.services.errors import (
    ClientError,
    Err,
    Ok,
    RejectionReason,
    Result,
    Violation,
    bad_request,
)

_FIELD = "favoriteWalletAddresses"


def normalize_tag_id(tag: Any) -> str:
    """Canonical string form used on both sides of a membership test."""
    return str(tag)


def invalid_tag_message(tag: str) -> str:
    return f'{_FIELD} contains invalid tag: "{tag}"'


def duplicate_tag_message(tag: str) -> str:
    return f'{_FIELD} contains duplicate tag: "{tag}"'


def duplicate_address_message(address: str) -> str:
    return f'{_FIELD} contains duplicate address: "{address}"'


_MESSAGES = {
    RejectionReason.INVALID_TAG: invalid_tag_message,
    RejectionReason.DUPLICATE_TAG: duplicate_tag_message,
    RejectionReason.DUPLICATE_ADDRESS: duplicate_address_message,
}


def violation_message(violation: Violation) -> str:
    return _MESSAGES[violation.kind](violation.subject)


def _check_tags(tags: Sequence[str], owned: frozenset[str]) -> list[Violation]:
    """Return one entry's violations: invalid tags, then duplicates, each in encounter order."""
    seen: set[str] = set()
    invalid: list[Violation] = []
    duplicate: list[Violation] = []
    for tag in tags:
        key = normalize_tag_id(tag)
        if key in seen:
            duplicate.append(Violation(RejectionReason.DUPLICATE_TAG, tag))
            continue
        seen.add(key)
        if key not in owned:
            invalid.append(Violation(RejectionReason.INVALID_TAG, tag))
    return invalid + duplicate


def _reject(violations: list[Violation]) -> Err:
    return Err(
        violations[0].kind,
        tuple(violation_message(v) for v in violations),
        tuple(violations),
    )


def validate_favorite_addresses(
    user_tags: Iterable[Any],
    candidates: Sequence[FavoriteWalletAddress],
) -> Result[Sequence[FavoriteWalletAddress]]:
    """Return ``Ok(candidates)`` unchanged, or the first entry's violations."""
    owned = frozenset(normalize_tag_id(t) for t in user_tags)
    addresses: set[str] = set()

    for favorite in candidates:
        violations = _check_tags(favorite.tags, owned)
        if violations:
            return _reject(violations)

        if favorite.wallet_address in addresses:
            return _reject([Violation(RejectionReason.DUPLICATE_ADDRESS, favorite.wallet_address)])
        addresses.add(favorite.wallet_address)

    return Ok(candidates)


def as_client_error(rejection: Err) -> ClientError:
    return bad_request(list(rejection.details))
