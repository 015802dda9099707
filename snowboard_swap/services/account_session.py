"""Account Session Manager: in-memory account store and the current session.

Invariants:
    - Usernames are unique case-insensitively across the store
    - Passwords are >= MIN_PASSWORD_LENGTH at registration and on change
    - A failed sign-in leaves the current session untouched and records last_error
    - sign_out clears the session only; the account stays in the store
    - Returned accounts are snapshots; the store is written only by this class
"""

import logging
import threading
from collections.abc import Iterable
from uuid import UUID, uuid4

from snowboard_swap.core.account_models import Account
from snowboard_swap.core.domain_types import DEFAULT_SELLER_RATING
from snowboard_swap.core.errors import (
    AccountError,
    EmptyUsernameError,
    IncorrectPasswordError,
    NoActiveAccountError,
    NoMatchingAccountError,
)
from snowboard_swap.core.listing_models import Seller
from snowboard_swap.core.validate_account import (
    normalize_username,
    validate_password_change,
    validate_profile_update,
    validate_registration,
)

logger = logging.getLogger(__name__)


class AccountSessionManager:
    """Owns every registered account and tracks which one is signed in."""

    def __init__(self, accounts: Iterable[Account] = ()):
        self._lock = threading.RLock()
        self._accounts: list[Account] = [a.snapshot() for a in accounts]
        self._current_id: UUID | None = None
        self.last_error: AccountError | None = None

    # ─── Queries ─────────────────────────────────────────────────

    @property
    def is_signed_in(self) -> bool:
        return self._current_id is not None

    @property
    def current_account(self) -> Account | None:
        with self._lock:
            account = self._find_by_id(self._current_id)
            return account.snapshot() if account else None

    def require_current_account(self) -> Account:
        """AccountProvider entry point for the other services."""
        account = self.current_account
        if account is None:
            raise NoActiveAccountError()
        return account

    def accounts(self) -> tuple[Account, ...]:
        with self._lock:
            return tuple(a.snapshot() for a in self._accounts)

    # ─── Session commands ────────────────────────────────────────

    def sign_in(self, username: str, password: str) -> Account:
        with self._lock:
            wanted = normalize_username(username)
            if not wanted:
                raise self._fail(EmptyUsernameError())
            account = next(
                (a for a in self._accounts if normalize_username(a.username) == wanted),
                None,
            )
            if account is None:
                raise self._fail(NoMatchingAccountError())
            if account.password != password:
                raise self._fail(IncorrectPasswordError())

            self._current_id = account.id
            self.last_error = None
            logger.info("Signed in", extra={"account_id": str(account.id)})
            return account.snapshot()

    def register(
        self, username: str, password: str, display_name: str = "",
    ) -> Account:
        with self._lock:
            error = validate_registration(
                username, password, (a.username for a in self._accounts),
            )
            if error:
                raise self._fail(error)

            trimmed_username = username.strip()
            account_id = uuid4()
            account = Account(
                id=account_id,
                username=trimmed_username,
                password=password,
                seller=Seller(
                    id=account_id,
                    nickname=display_name.strip() or trimmed_username,
                    rating=DEFAULT_SELLER_RATING,
                    deals_count=0,
                ),
            )
            self._accounts.append(account)
            self._current_id = account.id
            self.last_error = None
            logger.info("Registered account", extra={"account_id": str(account.id)})
            return account.snapshot()

    def sign_out(self) -> None:
        with self._lock:
            if self._current_id is not None:
                logger.info("Signed out", extra={"account_id": str(self._current_id)})
            self._current_id = None
            self.last_error = None

    # ─── Profile commands ────────────────────────────────────────

    def update_profile(
        self, display_name: str, email: str, location: str = "", bio: str = "",
    ) -> Account:
        with self._lock:
            account = self._require_live()
            error = validate_profile_update(display_name, email)
            if error:
                raise self._fail(error)

            account.seller = Seller(
                id=account.seller.id,
                nickname=display_name.strip(),
                rating=account.seller.rating,
                deals_count=account.seller.deals_count,
            )
            account.email = email.strip()
            account.location = location.strip()
            account.bio = bio.strip()
            self.last_error = None
            return account.snapshot()

    def change_password(self, current: str, new: str, confirm: str) -> Account:
        with self._lock:
            account = self._require_live()
            error = validate_password_change(account.password, current, new, confirm)
            if error:
                raise self._fail(error)
            account.password = new
            self.last_error = None
            logger.info("Password changed", extra={"account_id": str(account.id)})
            return account.snapshot()

    # ─── Follow graph ────────────────────────────────────────────

    def follow(self, seller_id: UUID) -> Account:
        with self._lock:
            account = self._require_live()
            if seller_id != account.id:
                account.following_seller_ids.add(seller_id)
            return account.snapshot()

    def unfollow(self, seller_id: UUID) -> Account:
        with self._lock:
            account = self._require_live()
            account.following_seller_ids.discard(seller_id)
            return account.snapshot()

    def toggle_follow(self, seller_id: UUID) -> Account:
        with self._lock:
            account = self._require_live()
            if account.is_following(seller_id):
                return self.unfollow(seller_id)
            return self.follow(seller_id)

    def record_follower(self, seller_id: UUID, follows: bool = True) -> Account:
        """Apply the counterparty's side of the graph (they (un)followed us)."""
        with self._lock:
            account = self._require_live()
            if follows and seller_id != account.id:
                account.followers_of_current_user.add(seller_id)
            else:
                account.followers_of_current_user.discard(seller_id)
            return account.snapshot()

    # ─── Internals ───────────────────────────────────────────────

    def _find_by_id(self, account_id: UUID | None) -> Account | None:
        if account_id is None:
            return None
        return next((a for a in self._accounts if a.id == account_id), None)

    def _require_live(self) -> Account:
        account = self._find_by_id(self._current_id)
        if account is None:
            raise self._fail(NoActiveAccountError())
        return account

    def _fail(self, error: AccountError) -> AccountError:
        self.last_error = error
        logger.warning(
            "Account operation rejected: %s", error.message,
            extra={"error_code": error.code},
        )
        return error
