"""Account Session Manager: tests for sign-in, registration, profile, password, follows.

Tests cover:
    - case-insensitive sign-in; wrong password leaves the session unchanged
    - duplicate registration in any case fails with "username taken"
    - registration defaults (rating 5.0, deals 0) and auto sign-in
    - update_profile / change_password validation order and commit
    - sign_out keeps the account; returned accounts are snapshots
"""

from uuid import uuid4

import pytest

from snowboard_swap.core.errors import (
    EmptyDisplayNameError,
    EmptyUsernameError,
    IncorrectCurrentPasswordError,
    IncorrectPasswordError,
    InvalidEmailError,
    NoActiveAccountError,
    NoMatchingAccountError,
    PasswordsDoNotMatchError,
    UsernameTakenError,
    UsernameTooShortError,
    WeakPasswordError,
)
from snowboard_swap.services.account_session import AccountSessionManager


@pytest.fixture
def manager():
    return AccountSessionManager()


@pytest.fixture
def alice(manager):
    account = manager.register("alice", "secret1", "Alice")
    manager.sign_out()
    return account


# ─── sign_in ─────────────────────────────────────────────────────

def test_sign_in_is_case_insensitive(manager, alice):
    account = manager.sign_in("ALICE", "secret1")
    assert account.id == alice.id
    assert manager.is_signed_in
    assert manager.last_error is None


def test_wrong_password_keeps_session(manager, alice):
    manager.sign_in("alice", "secret1")
    with pytest.raises(IncorrectPasswordError):
        manager.sign_in("alice", "wrong")
    assert manager.current_account.id == alice.id
    assert isinstance(manager.last_error, IncorrectPasswordError)


def test_wrong_password_without_session_stays_signed_out(manager, alice):
    with pytest.raises(IncorrectPasswordError):
        manager.sign_in("alice", "wrong")
    assert manager.current_account is None


def test_unknown_username(manager, alice):
    with pytest.raises(NoMatchingAccountError):
        manager.sign_in("bob", "secret1")


def test_blank_username(manager):
    with pytest.raises(EmptyUsernameError):
        manager.sign_in("   ", "secret1")


def test_successful_sign_in_clears_previous_error(manager, alice):
    with pytest.raises(NoMatchingAccountError):
        manager.sign_in("nobody", "secret1")
    manager.sign_in("alice", "secret1")
    assert manager.last_error is None


# ─── register ────────────────────────────────────────────────────

def test_register_defaults_and_auto_sign_in(manager):
    account = manager.register("carol", "secret1", "Carol C")
    assert manager.current_account.id == account.id
    assert account.seller.id == account.id
    assert account.seller.rating == 5.0
    assert account.seller.deals_count == 0
    assert account.display_name == "Carol C"


@pytest.mark.parametrize("duplicate", ["alice", "ALICE", "Alice"])
def test_duplicate_username_any_case(manager, alice, duplicate):
    with pytest.raises(UsernameTakenError) as exc:
        manager.register(duplicate, "another1", "Other")
    assert "username taken" in exc.value.message.lower()
    assert len(manager.accounts()) == 1


def test_register_validation(manager):
    with pytest.raises(UsernameTooShortError):
        manager.register("al", "secret1", "Al")
    with pytest.raises(WeakPasswordError):
        manager.register("alice", "12345", "Alice")
    assert manager.accounts() == ()


def test_blank_display_name_falls_back_to_username(manager):
    account = manager.register("dave", "secret1", "  ")
    assert account.display_name == "dave"


# ─── update_profile ──────────────────────────────────────────────

def test_update_profile_commits_and_refreshes_session(manager, alice):
    manager.sign_in("alice", "secret1")
    updated = manager.update_profile(" Alice P ", " alice@example.com ", "Zermatt", "Park rat")
    assert updated.display_name == "Alice P"
    assert updated.email == "alice@example.com"
    assert manager.current_account.location == "Zermatt"
    stored = next(a for a in manager.accounts() if a.id == alice.id)
    assert stored.bio == "Park rat"


def test_update_profile_rejections(manager, alice):
    manager.sign_in("alice", "secret1")
    with pytest.raises(EmptyDisplayNameError):
        manager.update_profile("  ", "a@b.co")
    with pytest.raises(InvalidEmailError):
        manager.update_profile("Alice", "not-an-email")
    assert manager.current_account.display_name == "Alice"


def test_profile_requires_session(manager):
    with pytest.raises(NoActiveAccountError):
        manager.update_profile("Alice", "alice@example.com")
    with pytest.raises(NoActiveAccountError):
        manager.require_current_account()


# ─── change_password ─────────────────────────────────────────────

def test_change_password_order_and_commit(manager, alice):
    manager.sign_in("alice", "secret1")
    with pytest.raises(IncorrectCurrentPasswordError):
        manager.change_password("nope", "abc", "xyz")
    with pytest.raises(PasswordsDoNotMatchError):
        manager.change_password("secret1", "abc", "xyz")
    with pytest.raises(WeakPasswordError):
        manager.change_password("secret1", "abc", "abc")

    manager.change_password("secret1", "better1", "better1")
    manager.sign_out()
    with pytest.raises(IncorrectPasswordError):
        manager.sign_in("alice", "secret1")
    assert manager.sign_in("alice", "better1").id == alice.id


# ─── sign_out / snapshots ────────────────────────────────────────

def test_sign_out_keeps_account(manager, alice):
    manager.sign_in("alice", "secret1")
    manager.sign_out()
    assert manager.current_account is None
    assert [a.id for a in manager.accounts()] == [alice.id]


def test_returned_accounts_are_snapshots(manager, alice):
    manager.sign_in("alice", "secret1")
    snapshot = manager.current_account
    snapshot.following_seller_ids.add(uuid4())
    assert manager.current_account.following_seller_ids == set()


# ─── follow graph ────────────────────────────────────────────────

def test_toggle_follow_and_record_follower(manager, alice):
    manager.sign_in("alice", "secret1")
    other = uuid4()
    assert other in manager.toggle_follow(other).following_seller_ids
    assert other not in manager.toggle_follow(other).following_seller_ids

    assert other in manager.record_follower(other).followers_of_current_user
    assert other not in manager.record_follower(other, follows=False).followers_of_current_user


def test_cannot_follow_self(manager, alice):
    manager.sign_in("alice", "secret1")
    assert alice.id not in manager.follow(alice.id).following_seller_ids
