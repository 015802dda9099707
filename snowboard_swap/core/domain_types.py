"""Domain Types: identity types, enums, and lookup tables shared across the core.

Invariants:
    - Every identity wraps a UUID (SellerId, ListingId, ...); never a bare str
    - Enum values are stable machine names; display strings and wire values
      live in separate lookup tables, never on the enum itself
    - Wire values parse case-insensitively; unknown values return None and the
      caller decides how to fail
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SellerId = NewType("SellerId", UUID)
AccountId = NewType("AccountId", UUID)
ListingId = NewType("ListingId", UUID)
ThreadId = NewType("ThreadId", UUID)
MessageId = NewType("MessageId", UUID)
TripId = NewType("TripId", UUID)
JoinRequestId = NewType("JoinRequestId", UUID)
UserId = NewType("UserId", UUID)


# ─── Value Bounds ────────────────────────────────────────────────

MIN_RATING = 0.0
MAX_RATING = 5.0
DEFAULT_SELLER_RATING = 5.0
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


# ─── Enums ───────────────────────────────────────────────────────

class Condition(str, Enum):
    """Physical condition of a listed board."""
    NEW = "new"
    LIKE_NEW = "like_new"
    GOOD = "good"
    WORN = "worn"


class TradeOption(str, Enum):
    """How the buyer and seller hand over the item."""
    FACE_TO_FACE = "face_to_face"
    COURIER = "courier"
    HYBRID = "hybrid"


class MessageSender(str, Enum):
    """Author side of a listing/direct message, relative to the current user."""
    BUYER = "buyer"
    SELLER = "seller"


class ChatStatus(str, Enum):
    """Outcome of the mutual-follow gate for a direct chat."""
    AVAILABLE = "available"
    AWAITING_CURRENT_USER_FOLLOW_BACK = "awaiting_current_user_follow_back"
    AWAITING_MUTUAL_FOLLOW = "awaiting_mutual_follow"

    @property
    def can_open_thread(self) -> bool:
        return self is ChatStatus.AVAILABLE


class TripJoinState(str, Enum):
    """Participation state of one seller relative to one trip."""
    ORGANIZER = "organizer"
    APPROVED = "approved"
    PENDING = "pending"
    NOT_REQUESTED = "not_requested"


class TripRole(str, Enum):
    """Role stamped on a group-trip chat message."""
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"


# ─── Lookup Tables ───────────────────────────────────────────────

CONDITION_DISPLAY_NAMES: dict[Condition, str] = {
    Condition.NEW: "Brand New",
    Condition.LIKE_NEW: "Like New",
    Condition.GOOD: "Good",
    Condition.WORN: "Well Used",
}

TRADE_OPTION_DISPLAY_NAMES: dict[TradeOption, str] = {
    TradeOption.FACE_TO_FACE: "Face to face",
    TradeOption.COURIER: "Courier",
    TradeOption.HYBRID: "Face to face or courier",
}

SENDER_DISPLAY_NAMES: dict[MessageSender, str] = {
    MessageSender.BUYER: "Me",
    MessageSender.SELLER: "Seller",
}

CONDITION_API_VALUES: dict[str, Condition] = {
    "new": Condition.NEW,
    "like_new": Condition.LIKE_NEW,
    "good": Condition.GOOD,
    "worn": Condition.WORN,
}

TRADE_OPTION_API_VALUES: dict[str, TradeOption] = {
    "face_to_face": TradeOption.FACE_TO_FACE,
    "courier": TradeOption.COURIER,
    "hybrid": TradeOption.HYBRID,
}


def parse_condition(api_value: str) -> Condition | None:
    """Map a wire string to a Condition; None when unrecognized."""
    return CONDITION_API_VALUES.get(api_value.lower())


def parse_trade_option(api_value: str) -> TradeOption | None:
    """Map a wire string to a TradeOption; None when unrecognized."""
    return TRADE_OPTION_API_VALUES.get(api_value.lower())


def condition_api_value(condition: Condition) -> str:
    return condition.value


def trade_option_api_value(option: TradeOption) -> str:
    return option.value
