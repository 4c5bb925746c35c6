"""
Pydantic schemas for booking-related request/response validation.
"""

from pydantic import BaseModel, Field

from train_booking.schemas.seat import SeatResponse


class BookingCreate(BaseModel):
    # Range is enforced by the allocation engine so the caller gets a
    # reason code rather than a generic validation error.
    count: int
    seat_ids: set[int] = Field(default_factory=set)


class BookingResponse(BaseModel):
    seat_ids: list[int]
    seats: list[SeatResponse]


class BookingCancelResponse(BaseModel):
    message: str
    seat_id: int
