"""
Seat allocation: contiguous block search and manual selection checks.

ALLOCATION STRATEGY: First fit, front of the car first
=====================================================

  Rows are scanned in ascending row number. Inside a row, a window of
  `count` seats slides over the seats in position order and the first
  window whose seats are all free wins.

  - A block never spans two rows; seat 7 and seat 8 are not adjacent.
  - The short last row (3 seats) can never hold a block larger than 3.
  - The result only depends on which seats are free, never on how the
    state happens to be ordered, so the same car always yields the same
    block.

Both functions are pure: they read the state and never change it.
"""

from collections.abc import Iterable
from typing import Optional

from train_booking.core.errors import InvalidCountError, SeatNotFoundError, SeatUnavailableError
from train_booking.core.result import Outcome
from train_booking.models.seat import MAX_BLOCK, SeatState, is_seat_id, row_width, seat_rows


def check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= MAX_BLOCK:
        raise InvalidCountError(count, MAX_BLOCK)


def find_contiguous_block(state: SeatState, count: int) -> Optional[frozenset[int]]:
    """
    Find the first run of `count` free, adjacent seats in one row.
    Returns the seat ids of the block, or None when no row has room.
    """
    check_count(count)

    for row in seat_rows(state):
        if row_width(row[0].row) < count:
            continue
        for start in range(len(row) - count + 1):
            window = row[start:start + count]
            if not any(seat.is_booked for seat in window):
                return frozenset(seat.id for seat in window)

    return None


def validate_manual_selection(state: SeatState, seat_ids: Iterable[int]) -> Outcome[frozenset[int]]:
    """
    Check a hand-picked set of seats against the current state.
    Unknown ids fail before availability is looked at.
    """
    selection = frozenset(seat_ids)

    unknown = [seat_id for seat_id in selection if not is_seat_id(seat_id)]
    if unknown:
        return Outcome.failure(SeatNotFoundError(unknown))

    taken = [seat_id for seat_id in selection if state[seat_id - 1].is_booked]
    if taken:
        return Outcome.failure(SeatUnavailableError(taken))

    return Outcome.success(selection)
