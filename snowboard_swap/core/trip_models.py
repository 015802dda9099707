"""Group Trip Records: trips, join requests, and the trip chat.

Invariants:
    - The organizer always counts as a participant and is never in approved_participant_ids
    - A seller is in at most one of {approved_participant_ids, pending_requests}
    - pending_requests keeps insertion order; at most one request per applicant
    - ParticipantRange: 1 <= minimum <= maximum
    - Exactly one GroupTripThread per trip
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from snowboard_swap.core.domain_types import (
    JoinRequestId,
    MessageId,
    SellerId,
    ThreadId,
    TripId,
    TripRole,
)
from snowboard_swap.core.listing_models import Seller


@dataclass(frozen=True)
class ParticipantRange:
    minimum: int
    maximum: int

    def __post_init__(self):
        if self.minimum < 1:
            raise ValueError(f"minimum must be >= 1, got {self.minimum}")
        if self.minimum > self.maximum:
            raise ValueError(
                f"minimum ({self.minimum}) must not exceed maximum ({self.maximum})"
            )

    def __contains__(self, count: int) -> bool:
        return self.minimum <= count <= self.maximum


@dataclass(frozen=True)
class JoinRequest:
    id: JoinRequestId
    applicant: Seller
    requested_at: datetime


@dataclass
class GroupTrip:
    """A shared ride to a resort, organized by one seller."""
    id: TripId
    title: str
    resort: str
    departure_location: str
    start_date: datetime
    participant_range: ParticipantRange
    estimated_cost_per_person: float
    organizer: Seller
    description: str = ""
    approved_participant_ids: set[SellerId] = field(default_factory=set)
    pending_requests: list[JoinRequest] = field(default_factory=list)

    @property
    def minimum_participants(self) -> int:
        return self.participant_range.minimum

    @property
    def maximum_participants(self) -> int:
        return self.participant_range.maximum

    @property
    def current_participants_count(self) -> int:
        # organizer plus approved riders
        return 1 + len(self.approved_participant_ids)

    @property
    def is_full(self) -> bool:
        return self.current_participants_count >= self.maximum_participants

    def includes_participant(self, seller_id: SellerId) -> bool:
        return (
            seller_id == self.organizer.id
            or seller_id in self.approved_participant_ids
        )

    def has_pending_request(self, seller_id: SellerId) -> bool:
        return any(r.applicant.id == seller_id for r in self.pending_requests)

    def pending_request(self, request_id: JoinRequestId) -> JoinRequest | None:
        return next(
            (r for r in self.pending_requests if r.id == request_id), None,
        )


@dataclass(frozen=True)
class GroupTripMessage:
    id: MessageId
    sender_id: SellerId
    sender_name: str
    role: TripRole
    text: str
    timestamp: datetime


@dataclass
class GroupTripThread:
    id: ThreadId
    trip_id: TripId
    messages: list[GroupTripMessage] = field(default_factory=list)

    def snapshot(self) -> "GroupTripThread":
        return replace(self, messages=list(self.messages))
