"""Account Validation: pure checks for registration, profile edits, and password changes.

Invariants:
    - All functions are PURE: no IO, no store access beyond the arguments given
    - Return an AccountError on violation, None on success
    - validate_* chain their checks in a fixed order; first error wins
    - Username comparison is case-insensitive (casefold)
"""

from collections.abc import Iterable

from snowboard_swap.core.domain_types import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from snowboard_swap.core.errors import (
    AccountError,
    EmptyDisplayNameError,
    IncorrectCurrentPasswordError,
    InvalidEmailError,
    PasswordsDoNotMatchError,
    UsernameTakenError,
    UsernameTooShortError,
    WeakPasswordError,
)


def normalize_username(username: str) -> str:
    return username.strip().casefold()


def check_username_length(username: str) -> AccountError | None:
    if len(username.strip()) < MIN_USERNAME_LENGTH:
        return UsernameTooShortError(MIN_USERNAME_LENGTH)
    return None


def check_password_strength(password: str) -> AccountError | None:
    if len(password) < MIN_PASSWORD_LENGTH:
        return WeakPasswordError(MIN_PASSWORD_LENGTH)
    return None


def check_username_available(
    username: str, existing_usernames: Iterable[str],
) -> AccountError | None:
    wanted = normalize_username(username)
    if any(normalize_username(u) == wanted for u in existing_usernames):
        return UsernameTakenError(username.strip())
    return None


def check_display_name(display_name: str) -> AccountError | None:
    if not display_name.strip():
        return EmptyDisplayNameError()
    return None


def check_email(email: str) -> AccountError | None:
    """Invalid only when the trimmed address has neither an '@' nor a '.'."""
    trimmed = email.strip()
    if "@" not in trimmed and "." not in trimmed:
        return InvalidEmailError(trimmed)
    return None


def check_current_password(stored: str, supplied: str) -> AccountError | None:
    if stored != supplied:
        return IncorrectCurrentPasswordError()
    return None


def check_passwords_match(new: str, confirm: str) -> AccountError | None:
    if new != confirm:
        return PasswordsDoNotMatchError()
    return None


def validate_registration(
    username: str, password: str, existing_usernames: Iterable[str],
) -> AccountError | None:
    return (
        check_username_length(username)
        or check_password_strength(password)
        or check_username_available(username, existing_usernames)
    )


def validate_profile_update(display_name: str, email: str) -> AccountError | None:
    return check_display_name(display_name) or check_email(email)


def validate_password_change(
    stored: str, current: str, new: str, confirm: str,
) -> AccountError | None:
    return (
        check_current_password(stored, current)
        or check_passwords_match(new, confirm)
        or check_password_strength(new)
    )
