"""
Error taxonomy for seat reservation.

Every error carries a stable ReasonCode and the HTTP status the API layer
answers with. The core hands these back inside an Outcome for expected
business results (seat taken, no block left); only precondition
violations are raised directly.
"""

from enum import Enum
from typing import Any, Iterable, Optional


class ReasonCode(str, Enum):
    INVALID_COUNT = "invalid_count"
    SEAT_NOT_FOUND = "seat_not_found"
    SEAT_UNAVAILABLE = "seat_unavailable"
    SELECTION_STALE = "selection_stale"
    INCOMPLETE_SELECTION = "incomplete_selection"
    OVERSIZED_SELECTION = "oversized_selection"
    NO_BLOCK_AVAILABLE = "no_block_available"
    SEAT_NOT_BOOKED = "seat_not_booked"
    NOT_OWNER = "not_owner"
    CONFLICT = "conflict"
    AUTHENTICATION_REQUIRED = "authentication_required"


def _ordered(seat_ids: Iterable[Any]) -> list:
    # Numeric ids first in numeric order; anything else a caller sent after them.
    return sorted(seat_ids, key=lambda v: (0, v) if isinstance(v, int) and not isinstance(v, bool) else (1, repr(v)))


class SeatReservationError(Exception):
    reason: ReasonCode
    status_code: int = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"detail": self.message, "reason": self.reason.value, **self.context}


class InvalidCountError(SeatReservationError):
    reason = ReasonCode.INVALID_COUNT
    status_code = 422

    def __init__(self, count: int, maximum: int):
        super().__init__(
            f"Seat count must be between 1 and {maximum}, got {count}",
            count=count,
        )


class SeatNotFoundError(SeatReservationError):
    reason = ReasonCode.SEAT_NOT_FOUND
    status_code = 404

    def __init__(self, seat_ids: Iterable[int]):
        ids = _ordered(seat_ids)
        super().__init__(f"Unknown seat(s): {ids}", seat_ids=ids)


class OutOfRangeError(SeatNotFoundError):
    """Seat id outside the car's layout."""


class SeatUnavailableError(SeatReservationError):
    reason = ReasonCode.SEAT_UNAVAILABLE
    status_code = 409

    def __init__(self, seat_ids: Iterable[int]):
        ids = _ordered(seat_ids)
        super().__init__(f"Seat(s) already booked: {ids}", seat_ids=ids)


class SelectionStaleError(SeatReservationError):
    reason = ReasonCode.SELECTION_STALE
    status_code = 409

    def __init__(self, seat_ids: Iterable[int]):
        ids = _ordered(seat_ids)
        super().__init__(
            f"Selected seat(s) were booked in the meantime: {ids}. "
            "Clear the selection and try again.",
            seat_ids=ids,
        )


class IncompleteSelectionError(SeatReservationError):
    reason = ReasonCode.INCOMPLETE_SELECTION
    status_code = 422

    def __init__(self, selected: int, requested: int):
        super().__init__(
            f"Selected {selected} seat(s) but requested {requested}. "
            "Select all seats or clear the selection for automatic allocation.",
            selected=selected,
            requested=requested,
        )


class OversizedSelectionError(SeatReservationError):
    reason = ReasonCode.OVERSIZED_SELECTION
    status_code = 422

    def __init__(self, selected: int, requested: int):
        super().__init__(
            f"Selected {selected} seat(s) but requested only {requested}",
            selected=selected,
            requested=requested,
        )


class NoBlockAvailableError(SeatReservationError):
    reason = ReasonCode.NO_BLOCK_AVAILABLE
    status_code = 409

    def __init__(self, count: int):
        super().__init__(f"No row has {count} adjacent free seat(s)", count=count)


class SeatNotBookedError(SeatReservationError):
    reason = ReasonCode.SEAT_NOT_BOOKED
    status_code = 400

    def __init__(self, seat_id: int):
        super().__init__(f"Seat {seat_id} is not booked", seat_id=seat_id)


class NotOwnerError(SeatReservationError):
    reason = ReasonCode.NOT_OWNER
    status_code = 403

    def __init__(self, seat_id: int):
        super().__init__(f"Seat {seat_id} is booked by another user", seat_id=seat_id)


class SeatConflictError(SeatReservationError):
    """
    A commit found a seat already taken. Raised by the ledger when its
    precondition does not hold; callers may re-read the state and retry.
    """

    reason = ReasonCode.CONFLICT
    status_code = 409

    def __init__(self, seat_ids: Iterable[int]):
        ids = _ordered(seat_ids)
        super().__init__(f"Seat(s) taken by a concurrent booking: {ids}", seat_ids=ids)


class AuthenticationRequiredError(SeatReservationError):
    reason = ReasonCode.AUTHENTICATION_REQUIRED
    status_code = 401

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Not authenticated")
