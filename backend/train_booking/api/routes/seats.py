"""
Seat map endpoint.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from train_booking.api.deps import get_seat_map_service
from train_booking.models.seat import CAPACITY, ROW_COUNT, ROW_WIDTH, booked_count, row_width, seat_rows
from train_booking.schemas.seat import SeatMapResponse, SeatResponse
from train_booking.services.reservation_service import ReservationService

router = APIRouter(prefix="/seats", tags=["Seats"])


@router.get("/", response_model=SeatMapResponse)
async def get_seat_map(service: ReservationService = Depends(get_seat_map_service)):
    """The whole car, row by row. Row 12 is the short row (seats 78-80)."""
    state = await service.seat_map()
    return SeatMapResponse(
        capacity=CAPACITY,
        row_width=ROW_WIDTH,
        row_widths=[row_width(row) for row in range(1, ROW_COUNT + 1)],
        available=CAPACITY - booked_count(state),
        rows=[[SeatResponse(**asdict(seat)) for seat in row] for row in seat_rows(state)],
    )
