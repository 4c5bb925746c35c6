"""
Booking endpoints: reserve seats, cancel a seat, list your seats.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from train_booking.api.deps import get_reservation_service
from train_booking.schemas.booking import BookingCreate, BookingResponse, BookingCancelResponse
from train_booking.schemas.seat import SeatResponse
from train_booking.services.booking_service import list_bookings_for
from train_booking.services.reservation_service import ReservationService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Book `count` seats.

    With `seat_ids` of exactly `count` seats those seats are booked, provided
    they are still free. Without `seat_ids` the first row with `count`
    adjacent free seats is used.
    """
    allocation = (await service.book(booking_data.count, booking_data.seat_ids)).unwrap()
    user = service.session.get_current_user()
    booked = [seat for seat in list_bookings_for(allocation.state, user) if seat.id in allocation.seat_ids]
    return BookingResponse(
        seat_ids=sorted(allocation.seat_ids),
        seats=[SeatResponse(**asdict(seat)) for seat in booked],
    )


@router.delete("/{seat_id}", response_model=BookingCancelResponse)
async def cancel_booking_endpoint(
    seat_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Release one of your seats."""
    (await service.cancel(seat_id)).unwrap()
    return BookingCancelResponse(message="Booking cancelled successfully", seat_id=seat_id)


@router.get("/", response_model=list[SeatResponse])
async def list_user_bookings(service: ReservationService = Depends(get_reservation_service)):
    """Seats booked by the authenticated user, by seat number."""
    return [SeatResponse(**asdict(seat)) for seat in await service.my_bookings()]
