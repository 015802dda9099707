"""Conversation Manager: listing/direct threads behind the mutual-follow gate.

Invariants:
    - A thread is created only when chat_status(...) is AVAILABLE; otherwise None
    - One thread per (current account, counterparty seller) pair
    - Every query and command sees only the current account's threads
    - send_message appends only; blank text and unknown threads return None
    - Message timestamps within a thread never decrease
    - Returned threads are snapshots; only this manager appends to message lists
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from uuid import uuid4

from snowboard_swap.core.domain_types import (
    AccountId,
    ChatStatus,
    MessageSender,
    SellerId,
    ThreadId,
)
from snowboard_swap.core.enforce_chat import chat_status
from snowboard_swap.core.listing_models import Listing, Seller
from snowboard_swap.core.store_protocols import AccountProvider
from snowboard_swap.core.thread_models import Message, MessageThread

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationManager:
    """Single writer of listing/direct message threads."""

    def __init__(
        self,
        current_account: AccountProvider,
        clock: Callable[[], datetime] = _now,
    ):
        self._current_account = current_account
        self._clock = clock
        self._lock = threading.RLock()
        self._threads: list[MessageThread] = []

    def chat_status(self, seller: Seller) -> ChatStatus:
        return chat_status(self._current_account(), seller.id)

    def thread_for_seller(
        self, seller: Seller, listing: Listing | None = None,
    ) -> MessageThread | None:
        """Lookup-or-create; None while the follow gate is closed."""
        account = self._current_account()
        if not chat_status(account, seller.id).can_open_thread:
            return None

        with self._lock:
            existing = self._find_by_seller(account.id, seller.id)
            if existing is not None:
                if listing is not None and (
                    existing.listing is None or not existing.listing.same_content(listing)
                ):
                    existing.listing = listing
                return existing.snapshot()

            thread = MessageThread(
                id=uuid4(), owner_id=account.id, seller=seller, listing=listing,
            )
            self._threads.append(thread)
            logger.info(
                "Opened thread",
                extra={"thread_id": str(thread.id), "account_id": str(account.id)},
            )
            return thread.snapshot()

    def thread_for_listing(self, listing: Listing) -> MessageThread | None:
        return self.thread_for_seller(listing.seller, listing)

    def send_message(self, text: str, thread: MessageThread) -> Message | None:
        trimmed = text.strip()
        if not trimmed:
            return None
        account = self._current_account()

        with self._lock:
            stored = self._find_by_id(account.id, thread.id)
            if stored is None:
                return None
            timestamp = self._clock()
            if stored.last_message and stored.last_message.timestamp > timestamp:
                timestamp = stored.last_message.timestamp
            message = Message(
                id=uuid4(),
                sender=MessageSender.BUYER,
                sender_id=account.seller.id,
                text=trimmed,
                timestamp=timestamp,
            )
            stored.messages.append(message)
            return message

    def thread(self, thread_id: ThreadId) -> MessageThread | None:
        account = self._current_account()
        with self._lock:
            stored = self._find_by_id(account.id, thread_id)
            return stored.snapshot() if stored else None

    def threads(self) -> tuple[MessageThread, ...]:
        account = self._current_account()
        with self._lock:
            return tuple(
                t.snapshot() for t in self._threads if t.owner_id == account.id
            )

    def _find_by_id(
        self, owner_id: AccountId, thread_id: ThreadId,
    ) -> MessageThread | None:
        return next(
            (t for t in self._threads if t.id == thread_id and t.owner_id == owner_id),
            None,
        )

    def _find_by_seller(
        self, owner_id: AccountId, seller_id: SellerId,
    ) -> MessageThread | None:
        return next(
            (
                t for t in self._threads
                if t.seller.id == seller_id and t.owner_id == owner_id
            ),
            None,
        )
