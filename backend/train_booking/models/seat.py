"""
Seat layout of the car and the immutable seat value.

The car has 80 seats laid out in rows of 7, numbered left to right, row by
row. The last row is short: 80 = 11 * 7 + 3, so row 12 holds seats 78-80.

A SeatState is a tuple of all 80 seats ordered by id. Nothing in the core
mutates a state in place; every transition returns a new tuple.
"""

from dataclasses import dataclass
from itertools import groupby
from typing import Optional

from train_booking.core.errors import OutOfRangeError

CAPACITY = 80
ROW_WIDTH = 7
ROW_COUNT = (CAPACITY + ROW_WIDTH - 1) // ROW_WIDTH
MAX_BLOCK = ROW_WIDTH


def is_seat_id(value: object) -> bool:
    """True for an int (not a bool) naming a seat of this car."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= CAPACITY


def derive_layout(seat_id: int) -> tuple[int, int]:
    """Return the 1-based (row, position_in_row) of a seat id."""
    if not is_seat_id(seat_id):
        raise OutOfRangeError([seat_id])
    row, position = divmod(seat_id - 1, ROW_WIDTH)
    return row + 1, position + 1


def row_width(row: int) -> int:
    """Number of seats in a row; the final row holds the remainder."""
    if not 1 <= row <= ROW_COUNT:
        raise ValueError(f"row must be between 1 and {ROW_COUNT}, got {row}")
    return min(ROW_WIDTH, CAPACITY - (row - 1) * ROW_WIDTH)


@dataclass(frozen=True)
class Seat:
    id: int
    row: int
    position_in_row: int
    is_booked: bool = False
    owner: Optional[str] = None

    def __post_init__(self):
        if self.is_booked != (self.owner is not None):
            raise ValueError(
                f"seat {self.id}: is_booked={self.is_booked} does not match owner={self.owner!r}"
            )

    @classmethod
    def create(cls, seat_id: int) -> "Seat":
        row, position = derive_layout(seat_id)
        return cls(id=seat_id, row=row, position_in_row=position)

    def booked_by(self, user: str) -> "Seat":
        return Seat(self.id, self.row, self.position_in_row, is_booked=True, owner=user)

    def released(self) -> "Seat":
        return Seat(self.id, self.row, self.position_in_row)


SeatState = tuple[Seat, ...]


def initial_state() -> SeatState:
    return tuple(Seat.create(seat_id) for seat_id in range(1, CAPACITY + 1))


def seat_at(state: SeatState, seat_id: int) -> Seat:
    derive_layout(seat_id)
    return state[seat_id - 1]


def seat_rows(state: SeatState) -> list[list[Seat]]:
    """Group seats into rows, each ordered by position."""
    ordered = sorted(state, key=lambda seat: (seat.row, seat.position_in_row))
    return [list(seats) for _, seats in groupby(ordered, key=lambda seat: seat.row)]


def booked_count(state: SeatState) -> int:
    return sum(1 for seat in state if seat.is_booked)


def is_valid_state(state: object) -> bool:
    """
    True when `state` is a full, ordered car: 80 seats with ids 1..80 in
    order and row/position matching the layout.
    """
    if not isinstance(state, tuple) or len(state) != CAPACITY:
        return False
    for expected_id, seat in enumerate(state, start=1):
        if not isinstance(seat, Seat) or seat.id != expected_id:
            return False
        if (seat.row, seat.position_in_row) != derive_layout(expected_id):
            return False
    return True
