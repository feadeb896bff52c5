from __future__ import annotations

from account_gateway.models.user import FavoriteWalletAddress
from account_gateway.services import favorites
from account_gateway.services.errors import Err, Ok, RejectionReason, Violation


def fav(address: str, *tags) -> FavoriteWalletAddress:
    return FavoriteWalletAddress(walletAddress=address, tags=list(tags))


def test_duplicate_tag_is_reported_without_address_check():
    outcome = favorites.validate_favorite_addresses({"A", "B"}, [fav("0x1", "A", "A")])

    assert isinstance(outcome, Err)
    assert outcome.reason is RejectionReason.DUPLICATE_TAG
    assert outcome.details == ('favoriteWalletAddresses contains duplicate tag: "A"',)


def test_duplicate_address_after_first_entry_passes():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "A"), fav("0x1", "A")])

    assert outcome.reason is RejectionReason.DUPLICATE_ADDRESS
    assert outcome.details == ('favoriteWalletAddresses contains duplicate address: "0x1"',)
    assert outcome.violations == (Violation(RejectionReason.DUPLICATE_ADDRESS, "0x1"),)


def test_tag_not_owned_is_invalid():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "Z")])

    assert isinstance(outcome, Err)
    assert outcome.reason is RejectionReason.INVALID_TAG
    assert outcome.details == ('favoriteWalletAddresses contains invalid tag: "Z"',)


def test_all_tag_violations_of_one_entry_are_listed_invalid_first():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "Z", "A", "Y", "A", "Z")])

    assert outcome.details == (
        'favoriteWalletAddresses contains invalid tag: "Z"',
        'favoriteWalletAddresses contains invalid tag: "Y"',
        'favoriteWalletAddresses contains duplicate tag: "A"',
        'favoriteWalletAddresses contains duplicate tag: "Z"',
    )


def test_each_violation_keeps_its_own_kind():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "A", "Z", "A")])

    assert outcome.violations == (
        Violation(RejectionReason.INVALID_TAG, "Z"),
        Violation(RejectionReason.DUPLICATE_TAG, "A"),
    )


def test_padded_tag_is_not_the_owned_tag():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", " A")])

    assert outcome.details == ('favoriteWalletAddresses contains invalid tag: " A"',)


def test_first_failing_entry_decides():
    outcome = favorites.validate_favorite_addresses(
        {"A"}, [fav("0x1", "A"), fav("0x2", "Q"), fav("0x1", "R")]
    )

    assert outcome.details == ('favoriteWalletAddresses contains invalid tag: "Q"',)


def test_tag_failure_in_repeated_address_entry_wins_over_duplicate_address():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "A"), fav("0x1", "A", "A")])

    assert outcome.reason is RejectionReason.DUPLICATE_TAG


def test_empty_list_is_accepted():
    assert favorites.validate_favorite_addresses({"A"}, []) == Ok([])


def test_entry_without_tags_only_gets_the_address_check():
    outcome = favorites.validate_favorite_addresses(set(), [fav("0x1"), fav("0x2")])
    assert isinstance(outcome, Ok)

    outcome = favorites.validate_favorite_addresses(set(), [fav("0x1"), fav("0x1")])
    assert outcome.reason is RejectionReason.DUPLICATE_ADDRESS


def test_tag_ids_are_compared_as_strings():
    class ObjectId:
        def __init__(self, raw):
            self.raw = raw

        def __str__(self):
            return self.raw

    owned = [ObjectId("64f0c0ffee"), 7]
    outcome = favorites.validate_favorite_addresses(owned, [fav("0x1", "64f0c0ffee", 7)])

    assert isinstance(outcome, Ok)


def test_revalidating_an_accepted_list_is_stable():
    candidates = [fav("0x1", "A"), fav("0x2", "A", "B"), fav("0x3")]
    snapshot = [c.model_copy() for c in candidates]

    first = favorites.validate_favorite_addresses({"A", "B"}, candidates)
    second = favorites.validate_favorite_addresses({"A", "B"}, candidates)

    assert first == second == Ok(candidates)
    assert first.value is candidates
    assert candidates == snapshot


def test_rejection_renders_bad_request_body():
    outcome = favorites.validate_favorite_addresses({"A"}, [fav("0x1", "Z")])
    error = favorites.as_client_error(outcome)

    assert error.status_code == 400
    assert error.body == {
        "message": ['favoriteWalletAddresses contains invalid tag: "Z"'],
        "error": "Bad Request",
    }
