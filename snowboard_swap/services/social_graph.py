"""Social Graph: community profiles and the chats unlocked by mutual follows.

Invariants:
    - A UserChatThread exists iff its user can chat (mutual follow)
    - Becoming mutual creates a thread seeded with GREETING_TEXT from the counterparty
    - Breaking the mutual follow hard-deletes the thread, history included
    - Toggling an unknown profile is a no-op returning None
    - Profiles and threads are returned as snapshots
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone
from uuid import UUID, uuid4

from snowboard_swap.core.social_models import UserChatMessage, UserChatThread, UserProfile

logger = logging.getLogger(__name__)

GREETING_TEXT = "Great to be following each other, let's ride together sometime!"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SocialGraph:
    """Single writer of community profiles and user chat threads."""

    def __init__(
        self,
        users: Iterable[UserProfile] = (),
        threads: Iterable[UserChatThread] = (),
        clock: Callable[[], datetime] = _now,
    ):
        self._clock = clock
        self._lock = threading.RLock()
        self._users: list[UserProfile] = [replace(u) for u in users]
        self._threads: list[UserChatThread] = []
        for thread in threads:
            user = self._find_user(thread.user.id)
            if user is not None and user.can_chat:
                self._threads.append(
                    replace(thread, user=replace(user), messages=list(thread.messages)),
                )

    def users(self) -> list[UserProfile]:
        with self._lock:
            return [replace(u) for u in self._users]

    def user(self, user_id: UUID) -> UserProfile | None:
        with self._lock:
            user = self._find_user(user_id)
            return replace(user) if user else None

    def threads(self) -> tuple[UserChatThread, ...]:
        with self._lock:
            return tuple(t.snapshot() for t in self._threads)

    def thread(self, user_id: UUID) -> UserChatThread | None:
        with self._lock:
            thread = self._find_thread_for_user(user_id)
            return thread.snapshot() if thread else None

    def toggle_follow(self, user_id: UUID) -> UserProfile | None:
        with self._lock:
            user = self._find_user(user_id)
            if user is None:
                return None
            user.is_following = not user.is_following
            self._sync_thread(user)
            return replace(user)

    def set_follows_me(self, user_id: UUID, follows: bool) -> UserProfile | None:
        """Apply the counterparty's follow/unfollow of the current user."""
        with self._lock:
            user = self._find_user(user_id)
            if user is None:
                return None
            user.is_following_me = follows
            self._sync_thread(user)
            return replace(user)

    def refresh_thread_user(self, profile: UserProfile) -> None:
        with self._lock:
            thread = self._find_thread_for_user(profile.id)
            if thread is not None:
                thread.user = replace(profile)

    def send_message(self, text: str, thread: UserChatThread) -> UserChatMessage | None:
        trimmed = text.strip()
        if not trimmed:
            return None
        with self._lock:
            stored = next((t for t in self._threads if t.id == thread.id), None)
            if stored is None:
                return None
            timestamp = self._clock()
            if stored.messages and stored.messages[-1].timestamp > timestamp:
                timestamp = stored.messages[-1].timestamp
            message = UserChatMessage(
                id=uuid4(), is_current_user=True, text=trimmed, timestamp=timestamp,
            )
            stored.messages.append(message)
            return message

    def _sync_thread(self, user: UserProfile) -> None:
        thread = self._find_thread_for_user(user.id)
        if thread is not None:
            if user.can_chat:
                thread.user = replace(user)
            else:
                self._threads.remove(thread)
                logger.info("Chat thread removed after unfollow", extra={"thread_id": str(thread.id)})
        elif user.can_chat:
            greeting = UserChatMessage(
                id=uuid4(), is_current_user=False, text=GREETING_TEXT,
                timestamp=self._clock(),
            )
            thread = UserChatThread(id=uuid4(), user=replace(user), messages=[greeting])
            self._threads.append(thread)
            logger.info("Chat thread opened on mutual follow", extra={"thread_id": str(thread.id)})

    def _find_user(self, user_id: UUID) -> UserProfile | None:
        return next((u for u in self._users if u.id == user_id), None)

    def _find_thread_for_user(self, user_id: UUID) -> UserChatThread | None:
        return next((t for t in self._threads if t.user.id == user_id), None)
