"""
Pydantic schemas for seats: API responses and the persisted snapshot.
"""

from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel, TypeAdapter, ValidationError, model_validator

from train_booking.models.seat import CAPACITY, Seat, SeatState, derive_layout, is_valid_state


class SeatResponse(BaseModel):
    id: int
    row: int
    position_in_row: int
    is_booked: bool
    owner: Optional[str] = None

    model_config = {"from_attributes": True}


class SeatMapResponse(BaseModel):
    capacity: int
    row_width: int
    row_widths: list[int]
    available: int
    rows: list[list[SeatResponse]]


class SeatSnapshot(BaseModel):
    """One seat as stored by a snapshot store."""

    id: int
    row: int
    position_in_row: int
    is_booked: bool
    owner: Optional[str] = None

    model_config = {"from_attributes": True, "extra": "forbid"}

    @model_validator(mode="after")
    def check_layout_and_owner(self) -> "SeatSnapshot":
        if not 1 <= self.id <= CAPACITY:
            raise ValueError(f"seat id {self.id} outside 1..{CAPACITY}")
        if (self.row, self.position_in_row) != derive_layout(self.id):
            raise ValueError(f"seat {self.id} has wrong row/position")
        if self.is_booked != (self.owner is not None):
            raise ValueError(f"seat {self.id} booked flag does not match owner")
        return self

    def to_seat(self) -> Seat:
        return Seat(
            id=self.id,
            row=self.row,
            position_in_row=self.position_in_row,
            is_booked=self.is_booked,
            owner=self.owner,
        )


_snapshot_adapter = TypeAdapter(list[SeatSnapshot])


def encode_snapshot(state: SeatState) -> bytes:
    return _snapshot_adapter.dump_json([SeatSnapshot(**asdict(seat)) for seat in state])


def _to_state(snapshots: list[SeatSnapshot]) -> Optional[SeatState]:
    state = tuple(seat.to_seat() for seat in sorted(snapshots, key=lambda s: s.id))
    return state if is_valid_state(state) else None


def state_from_records(records: list) -> Optional[SeatState]:
    """
    Build a SeatState from snapshot-shaped records (dicts or ORM rows).
    Returns None when the records do not describe a full, valid car.
    """
    try:
        snapshots = _snapshot_adapter.validate_python(records, from_attributes=True)
    except ValidationError:
        return None
    return _to_state(snapshots)


def decode_snapshot(raw) -> Optional[SeatState]:
    """Parse a JSON snapshot; malformed input yields None."""
    try:
        snapshots = _snapshot_adapter.validate_json(raw)
    except ValidationError:
        return None
    return _to_state(snapshots)
