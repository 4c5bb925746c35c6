from train_booking.schemas.user import UserCreate, UserResponse, UserLogin, Token
from train_booking.schemas.seat import SeatResponse, SeatMapResponse, SeatSnapshot
from train_booking.schemas.booking import BookingCreate, BookingResponse, BookingCancelResponse

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "Token",
    "SeatResponse", "SeatMapResponse", "SeatSnapshot",
    "BookingCreate", "BookingResponse", "BookingCancelResponse",
]
