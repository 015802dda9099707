"""Account Validation: tests for the pure registration/profile/password checks.

Tests cover:
    - username length and case-insensitive uniqueness
    - password strength threshold
    - email rule (invalid only when neither '@' nor '.' is present)
    - validate_* chains report the first failing check
"""

import pytest

from snowboard_swap.core.errors import (
    EmptyDisplayNameError,
    IncorrectCurrentPasswordError,
    InvalidEmailError,
    PasswordsDoNotMatchError,
    UsernameTakenError,
    UsernameTooShortError,
    WeakPasswordError,
)
from snowboard_swap.core.validate_account import (
    check_email,
    check_password_strength,
    check_username_available,
    check_username_length,
    normalize_username,
    validate_password_change,
    validate_profile_update,
    validate_registration,
)


def test_normalize_username_strips_and_casefolds():
    assert normalize_username("  Alice ") == "alice"


def test_username_length():
    assert isinstance(check_username_length("al"), UsernameTooShortError)
    assert isinstance(check_username_length("  al  "), UsernameTooShortError)
    assert check_username_length("ali") is None


def test_password_strength_threshold():
    assert isinstance(check_password_strength("12345"), WeakPasswordError)
    assert check_password_strength("123456") is None


@pytest.mark.parametrize("candidate", ["alice", "ALICE", "Alice", " aLiCe "])
def test_username_taken_any_case(candidate):
    error = check_username_available(candidate, ["alice", "bob"])
    assert isinstance(error, UsernameTakenError)
    assert "taken" in error.message.lower()


def test_username_available():
    assert check_username_available("carol", ["alice", "bob"]) is None


@pytest.mark.parametrize(
    "email",
    ["rider@example.com", "rider@example", "rider.example.com", "  rider@x  "],
)
def test_valid_emails(email):
    assert check_email(email) is None


@pytest.mark.parametrize("email", ["", "   ", "rider", "rider-example"])
def test_invalid_emails(email):
    assert isinstance(check_email(email), InvalidEmailError)


def test_registration_checks_length_before_uniqueness():
    error = validate_registration("al", "123", ["al"])
    assert isinstance(error, UsernameTooShortError)


def test_registration_checks_password_before_uniqueness():
    error = validate_registration("alice", "123", ["alice"])
    assert isinstance(error, WeakPasswordError)


def test_registration_ok():
    assert validate_registration("carol", "secret1", ["alice"]) is None


def test_profile_update_blank_name_first():
    assert isinstance(validate_profile_update("   ", "bad"), EmptyDisplayNameError)
    assert isinstance(validate_profile_update("Alice", "bad"), InvalidEmailError)
    assert validate_profile_update("Alice", "a@b.co") is None


def test_password_change_order():
    assert isinstance(
        validate_password_change("secret1", "wrong", "x", "y"),
        IncorrectCurrentPasswordError,
    )
    assert isinstance(
        validate_password_change("secret1", "secret1", "abc", "xyz"),
        PasswordsDoNotMatchError,
    )
    assert isinstance(
        validate_password_change("secret1", "secret1", "abc", "abc"),
        WeakPasswordError,
    )
    assert validate_password_change("secret1", "secret1", "better1", "better1") is None
