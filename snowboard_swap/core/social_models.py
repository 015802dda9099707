"""Social Records: community profiles and the chats that mutual follows unlock.

Invariants:
    - UserProfile.can_chat <=> is_following and is_following_me
    - A UserChatThread exists only while its user can chat
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from snowboard_swap.core.domain_types import MessageId, ThreadId, UserId


@dataclass
class UserProfile:
    id: UserId
    display_name: str
    bio: str = ""
    home_resort: str = ""
    is_following: bool = False
    is_following_me: bool = False
    avatar_symbol: str = "person.fill"

    @property
    def can_chat(self) -> bool:
        return self.is_following and self.is_following_me


@dataclass(frozen=True)
class UserChatMessage:
    id: MessageId
    is_current_user: bool
    text: str
    timestamp: datetime


@dataclass
class UserChatThread:
    id: ThreadId
    user: UserProfile
    messages: list[UserChatMessage] = field(default_factory=list)

    def snapshot(self) -> "UserChatThread":
        return replace(self, user=replace(self.user), messages=list(self.messages))
