from train_booking.models.user import User
from train_booking.models.seat_record import SeatRecord

__all__ = ["User", "SeatRecord"]
