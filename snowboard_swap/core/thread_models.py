"""Thread Records: listing/direct message threads.

Invariants:
    - Messages are append-only and immutable once created
    - Message timestamps within a thread are non-decreasing
    - One thread per (owner account, counterparty seller) pair; the listing is optional context
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from snowboard_swap.core.domain_types import (
    AccountId,
    MessageId,
    MessageSender,
    SellerId,
    SENDER_DISPLAY_NAMES,
    ThreadId,
)
from snowboard_swap.core.listing_models import Listing, Seller


@dataclass(frozen=True)
class Message:
    id: MessageId
    sender: MessageSender
    sender_id: SellerId
    text: str
    timestamp: datetime

    @property
    def sender_name(self) -> str:
        return SENDER_DISPLAY_NAMES[self.sender]


@dataclass(eq=False)
class MessageThread:
    """Conversation between one account (the owner) and one counterparty seller."""
    id: ThreadId
    owner_id: AccountId
    seller: Seller
    listing: Listing | None = None
    messages: list[Message] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.listing.title if self.listing else self.seller.nickname

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def snapshot(self) -> "MessageThread":
        """Detached copy; appending to it never touches the store."""
        return replace(self, messages=list(self.messages))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageThread):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
