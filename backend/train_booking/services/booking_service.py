"""
Booking ledger: the only place seat ownership changes.

RESOLUTION POLICY for a booking request
=======================================

A request carries the acting user, the number of seats wanted and an
optional hand-picked selection.

  1. Selection size == count:
       re-validate the selection against the state about to be written.
       Seats booked since they were picked -> SelectionStaleError.
  2. Empty selection:
       automatic allocation; no contiguous block -> NoBlockAvailableError.
  3. 0 < selection size < count:
       IncompleteSelectionError. The partial pick is not silently replaced
       by an automatic block. With allow_partial_fallback the request is
       treated like case 2 instead.
  4. Selection size > count: OversizedSelectionError.

Expected outcomes come back as Outcome values. `book` itself raises
SeatConflictError when asked to take a seat that is already booked, so a
caller holding a stale state learns about it instead of double-booking.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from train_booking.core.errors import (
    IncompleteSelectionError,
    NoBlockAvailableError,
    NotOwnerError,
    OversizedSelectionError,
    SeatConflictError,
    SeatNotBookedError,
    SeatNotFoundError,
    SeatReservationError,
    SeatUnavailableError,
    SelectionStaleError,
)
from train_booking.core.result import Outcome
from train_booking.core.logging import get_logger
from train_booking.models.seat import Seat, SeatState, is_seat_id, seat_at
from train_booking.services.allocation_service import (
    check_count,
    find_contiguous_block,
    validate_manual_selection,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class BookingRequest:
    user: str
    count: int
    seat_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def manual(cls, user: str, seat_ids: Iterable[int]) -> "BookingRequest":
        ids = frozenset(seat_ids)
        return cls(user=user, count=len(ids), seat_ids=ids)

    @classmethod
    def auto(cls, user: str, count: int) -> "BookingRequest":
        return cls(user=user, count=count)

    @property
    def mode(self) -> str:
        return "manual" if self.seat_ids else "auto"


@dataclass(frozen=True)
class Allocation:
    state: SeatState
    seat_ids: frozenset[int]


def book(state: SeatState, seat_ids: Iterable[int], user: str) -> SeatState:
    """Mark every seat in `seat_ids` as booked by `user`."""
    ids = frozenset(seat_ids)

    unknown = [seat_id for seat_id in ids if not is_seat_id(seat_id)]
    if unknown:
        raise SeatNotFoundError(unknown)

    taken = [seat_id for seat_id in ids if state[seat_id - 1].is_booked]
    if taken:
        raise SeatConflictError(taken)

    return tuple(seat.booked_by(user) if seat.id in ids else seat for seat in state)


def cancel(state: SeatState, seat_id: int, user: str) -> Outcome[SeatState]:
    """Release one seat; only its owner may do so."""
    try:
        seat = seat_at(state, seat_id)
    except SeatNotFoundError as exc:
        return Outcome.failure(exc)

    if not seat.is_booked:
        return Outcome.failure(SeatNotBookedError(seat_id))
    if seat.owner != user:
        return Outcome.failure(NotOwnerError(seat_id))

    return Outcome.success(
        tuple(s.released() if s.id == seat_id else s for s in state)
    )


def _resolve_seats(state: SeatState, request: BookingRequest, allow_partial_fallback: bool) -> frozenset[int]:
    check_count(request.count)
    selected = len(request.seat_ids)

    if selected == request.count:
        validation = validate_manual_selection(state, request.seat_ids)
        if isinstance(validation.error, SeatUnavailableError):
            raise SelectionStaleError(validation.error.context["seat_ids"])
        return validation.unwrap()

    if selected > request.count:
        raise OversizedSelectionError(selected, request.count)

    if selected and not allow_partial_fallback:
        raise IncompleteSelectionError(selected, request.count)

    block = find_contiguous_block(state, request.count)
    if block is None:
        raise NoBlockAvailableError(request.count)
    return block


def submit_booking(
    state: SeatState,
    request: BookingRequest,
    allow_partial_fallback: bool = False,
) -> Outcome[Allocation]:
    """Resolve a booking request to concrete seats and book them."""
    try:
        seat_ids = _resolve_seats(state, request, allow_partial_fallback)
        new_state = book(state, seat_ids, request.user)
    except SeatReservationError as exc:
        logger.info(
            "booking_rejected",
            user=request.user,
            mode=request.mode,
            count=request.count,
            reason=exc.reason.value,
        )
        return Outcome.failure(exc)

    logger.info(
        "seats_booked",
        user=request.user,
        mode=request.mode,
        seat_ids=sorted(seat_ids),
    )
    return Outcome.success(Allocation(state=new_state, seat_ids=seat_ids))


def submit_cancellation(state: SeatState, seat_id: int, user: str) -> Outcome[SeatState]:
    outcome = cancel(state, seat_id, user)
    if outcome.ok:
        logger.info("seat_cancelled", user=user, seat_id=seat_id)
    else:
        logger.info(
            "cancellation_rejected",
            user=user,
            seat_id=seat_id,
            reason=outcome.error.reason.value,
        )
    return outcome


def list_bookings_for(state: SeatState, user: str) -> tuple[Seat, ...]:
    return tuple(sorted((seat for seat in state if seat.owner == user), key=lambda seat: seat.id))
