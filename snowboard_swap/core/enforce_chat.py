"""Chat Gate: mutual-follow authorization for direct and listing chats.

Invariants:
    - All functions are PURE: no IO, no mutation, no ambient session lookup
    - AVAILABLE requires both follow directions; one-sided follow-back is
      reported as AWAITING_CURRENT_USER_FOLLOW_BACK; anything else is
      AWAITING_MUTUAL_FOLLOW
    - Must be re-evaluated after every follow-graph mutation (results are snapshots)
"""

from uuid import UUID

from snowboard_swap.core.account_models import Account
from snowboard_swap.core.domain_types import ChatStatus
from snowboard_swap.core.errors import ChatNotAvailableError
from snowboard_swap.core.social_models import UserProfile


def _status_from_follows(is_following: bool, is_followed_by: bool) -> ChatStatus:
    if is_following and is_followed_by:
        return ChatStatus.AVAILABLE
    if is_followed_by:
        return ChatStatus.AWAITING_CURRENT_USER_FOLLOW_BACK
    return ChatStatus.AWAITING_MUTUAL_FOLLOW


def chat_status(account: Account, counterparty_id: UUID) -> ChatStatus:
    """Gate for listing/direct chat between the account and a seller."""
    return _status_from_follows(
        account.is_following(counterparty_id),
        account.is_followed_by(counterparty_id),
    )


def profile_chat_status(profile: UserProfile) -> ChatStatus:
    """Same gate, read from a community profile's follow flags."""
    return _status_from_follows(profile.is_following, profile.is_following_me)


def can_chat(account: Account, counterparty_id: UUID) -> bool:
    return chat_status(account, counterparty_id).can_open_thread


def check_can_open_chat(
    account: Account, counterparty_id: UUID,
) -> ChatNotAvailableError | None:
    """Denial value when the gate is closed, None when chat is available."""
    status = chat_status(account, counterparty_id)
    if not status.can_open_thread:
        return ChatNotAvailableError(status)
    return None
