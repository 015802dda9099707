"""Trip Gate: participation state and trip-chat access for group trips.

Invariants:
    - All functions are PURE: no IO, no mutation
    - trip_join_state precedence: organizer > approved > pending > not_requested,
      so exactly one state holds even on a stale trip snapshot
    - Trip chat is open to the organizer and approved riders only
    - check_* functions return a denial or None; chain with `or`, first denial wins
"""

from uuid import UUID

from snowboard_swap.core.domain_types import TripJoinState, TripRole
from snowboard_swap.core.errors import (
    JoinRequestNotAllowedError,
    NotTripOrganizerError,
    TripChatAccessDeniedError,
)
from snowboard_swap.core.trip_models import GroupTrip


def trip_join_state(trip: GroupTrip, seller_id: UUID) -> TripJoinState:
    if trip.organizer.id == seller_id:
        return TripJoinState.ORGANIZER
    if seller_id in trip.approved_participant_ids:
        return TripJoinState.APPROVED
    if trip.has_pending_request(seller_id):
        return TripJoinState.PENDING
    return TripJoinState.NOT_REQUESTED


def can_access_trip_chat(trip: GroupTrip, seller_id: UUID) -> bool:
    return trip_join_state(trip, seller_id) in (
        TripJoinState.ORGANIZER, TripJoinState.APPROVED,
    )


def resolve_trip_role(trip: GroupTrip, sender_id: UUID) -> TripRole:
    if trip.organizer.id == sender_id:
        return TripRole.ORGANIZER
    return TripRole.PARTICIPANT


def check_trip_chat_access(
    trip: GroupTrip, seller_id: UUID,
) -> TripChatAccessDeniedError | None:
    if not can_access_trip_chat(trip, seller_id):
        return TripChatAccessDeniedError()
    return None


def check_can_request_join(
    trip: GroupTrip, seller_id: UUID,
) -> JoinRequestNotAllowedError | None:
    """Only a seller in NOT_REQUESTED may file a join request."""
    state = trip_join_state(trip, seller_id)
    if state is not TripJoinState.NOT_REQUESTED:
        return JoinRequestNotAllowedError(state)
    return None


def check_is_organizer(
    trip: GroupTrip, seller_id: UUID,
) -> NotTripOrganizerError | None:
    if trip.organizer.id != seller_id:
        return NotTripOrganizerError()
    return None

