"""Trip Roster: group trips, join requests, and trip chats.

Invariants:
    - The acting seller is always an explicit argument; no ambient identity
    - request_to_join is idempotent per (trip, applicant); organizer/approved/pending get None
    - approve moves one applicant pending -> approved, removing that request by id;
      only the organizer may approve
    - revoke removes a pending request by id and never touches the approved set
    - Trip chat threads are created lazily, only for the organizer or approved riders
    - Trip messages are stamped with the sender's role (organizer vs participant)
    - Trips and threads are returned as snapshots; callers never hold the stored lists
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from uuid import UUID, uuid4

from snowboard_swap.core.domain_types import TripJoinState
from snowboard_swap.core.enforce_trip import (
    can_access_trip_chat,
    check_can_request_join,
    check_is_organizer,
    resolve_trip_role,
    trip_join_state,
)
from snowboard_swap.core.errors import TripValidationError
from snowboard_swap.core.listing_models import Seller
from snowboard_swap.core.trip_models import (
    GroupTrip,
    GroupTripMessage,
    GroupTripThread,
    JoinRequest,
    ParticipantRange,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TripRoster:
    """Single writer of group trips and their chat threads."""

    def __init__(self, clock: Callable[[], datetime] = _now):
        self._clock = clock
        self._lock = threading.RLock()
        self._trips: list[GroupTrip] = []
        self._threads: list[GroupTripThread] = []

    # ─── Trips ───────────────────────────────────────────────────

    def create_trip(
        self,
        organizer: Seller,
        title: str,
        resort: str,
        departure_location: str,
        start_date: datetime,
        participant_range: ParticipantRange | tuple[int, int],
        estimated_cost_per_person: float,
        description: str = "",
    ) -> GroupTrip:
        if not title.strip():
            raise TripValidationError("Trip title cannot be empty.", "title")
        if not resort.strip():
            raise TripValidationError("Resort cannot be empty.", "resort")
        if estimated_cost_per_person < 0:
            raise TripValidationError(
                "Estimated cost cannot be negative.", "estimated_cost_per_person",
            )
        if not isinstance(participant_range, ParticipantRange):
            try:
                participant_range = ParticipantRange(*participant_range)
            except ValueError as e:
                raise TripValidationError(str(e), "participant_range") from e

        trip = GroupTrip(
            id=uuid4(),
            title=title.strip(),
            resort=resort.strip(),
            departure_location=departure_location.strip(),
            start_date=start_date,
            participant_range=participant_range,
            estimated_cost_per_person=estimated_cost_per_person,
            organizer=organizer,
            description=description.strip(),
        )
        with self._lock:
            self._trips.insert(0, trip)
        logger.info(
            "Trip created",
            extra={"trip_id": str(trip.id), "account_id": str(organizer.id)},
        )
        return self._snapshot(trip)

    def trip(self, trip_id: UUID) -> GroupTrip | None:
        with self._lock:
            trip = self._find_trip(trip_id)
            return self._snapshot(trip) if trip else None

    def trips(self) -> list[GroupTrip]:
        with self._lock:
            return [self._snapshot(t) for t in self._trips]

    def sorted_trips(self) -> list[GroupTrip]:
        return sorted(self.trips(), key=lambda t: t.start_date)

    def join_state(self, trip_id: UUID, seller_id: UUID) -> TripJoinState | None:
        with self._lock:
            trip = self._find_trip(trip_id)
            return trip_join_state(trip, seller_id) if trip else None

    # ─── Join requests ───────────────────────────────────────────

    def request_to_join(self, trip_id: UUID, actor: Seller) -> JoinRequest | None:
        with self._lock:
            trip = self._find_trip(trip_id)
            if trip is None or check_can_request_join(trip, actor.id):
                return None
            request = JoinRequest(
                id=uuid4(), applicant=actor, requested_at=self._clock(),
            )
            trip.pending_requests.append(request)
        logger.info(
            "Join requested",
            extra={"trip_id": str(trip_id), "account_id": str(actor.id)},
        )
        return request

    def approve(self, request_id: UUID, trip_id: UUID, actor: Seller) -> GroupTrip | None:
        """Returns the updated trip, or None when nothing changed."""
        with self._lock:
            trip = self._find_trip(trip_id)
            if trip is None:
                return None
            denial = check_is_organizer(trip, actor.id)
            if denial:
                logger.warning(
                    "Approval rejected: %s", denial.message,
                    extra={"trip_id": str(trip_id), "error_code": denial.code},
                )
                return None
            request = trip.pending_request(request_id)
            if request is None:
                return None
            trip.pending_requests = [
                r for r in trip.pending_requests if r.id != request_id
            ]
            if request.applicant.id != trip.organizer.id:
                trip.approved_participant_ids.add(request.applicant.id)
        logger.info(
            "Join approved",
            extra={"trip_id": str(trip_id), "account_id": str(request.applicant.id)},
        )
        return self.trip(trip_id)

    def revoke(self, request_id: UUID, trip_id: UUID) -> GroupTrip | None:
        """Decline a pending request; the applicant returns to NOT_REQUESTED."""
        with self._lock:
            trip = self._find_trip(trip_id)
            if trip is None or trip.pending_request(request_id) is None:
                return None
            trip.pending_requests = [
                r for r in trip.pending_requests if r.id != request_id
            ]
        logger.info("Join request revoked", extra={"trip_id": str(trip_id)})
        return self.trip(trip_id)

    # ─── Trip chat ───────────────────────────────────────────────

    def trip_thread(self, trip_id: UUID, actor: Seller) -> GroupTripThread | None:
        with self._lock:
            trip = self._find_trip(trip_id)
            if trip is None or not can_access_trip_chat(trip, actor.id):
                return None
            thread = self._find_thread_for_trip(trip_id)
            if thread is None:
                thread = GroupTripThread(id=uuid4(), trip_id=trip_id)
                self._threads.append(thread)
            return thread.snapshot()

    def send_trip_message(
        self, text: str, thread: GroupTripThread, sender: Seller,
    ) -> GroupTripMessage | None:
        trimmed = text.strip()
        if not trimmed:
            return None
        with self._lock:
            stored = next((t for t in self._threads if t.id == thread.id), None)
            if stored is None:
                return None
            trip = self._find_trip(stored.trip_id)
            if trip is None or not can_access_trip_chat(trip, sender.id):
                return None
            timestamp = self._clock()
            if stored.messages and stored.messages[-1].timestamp > timestamp:
                timestamp = stored.messages[-1].timestamp
            message = GroupTripMessage(
                id=uuid4(),
                sender_id=sender.id,
                sender_name=sender.nickname,
                role=resolve_trip_role(trip, sender.id),
                text=trimmed,
                timestamp=timestamp,
            )
            stored.messages.append(message)
            return message

    def trip_threads(self) -> tuple[GroupTripThread, ...]:
        with self._lock:
            return tuple(t.snapshot() for t in self._threads)

    # ─── Internals ───────────────────────────────────────────────

    def _find_trip(self, trip_id: UUID) -> GroupTrip | None:
        return next((t for t in self._trips if t.id == trip_id), None)

    def _find_thread_for_trip(self, trip_id: UUID) -> GroupTripThread | None:
        return next((t for t in self._threads if t.trip_id == trip_id), None)

    @staticmethod
    def _snapshot(trip: GroupTrip) -> GroupTrip:
        return replace(
            trip,
            approved_participant_ids=set(trip.approved_participant_ids),
            pending_requests=list(trip.pending_requests),
        )
