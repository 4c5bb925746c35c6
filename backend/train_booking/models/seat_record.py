"""
Persisted seat row: one record per seat in the car.

Key design decisions:
- Primary key is the seat id itself (1..80); the layout never changes
- row/position are stored so the table reads on its own, and are checked
  against the derived layout when a snapshot is loaded
- owner holds the booking user's email; NULL exactly when not booked
"""

from sqlalchemy import Column, Integer, String, Boolean, CheckConstraint, Index

from train_booking.db.base import Base, TimestampMixin


class SeatRecord(Base, TimestampMixin):
    __tablename__ = "seats"

    id = Column(Integer, primary_key=True, autoincrement=False)
    row = Column(Integer, nullable=False)
    position_in_row = Column(Integer, nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)
    owner = Column(String(255), nullable=True)

    __table_args__ = (
        CheckConstraint("id BETWEEN 1 AND 80", name="check_seat_id_range"),
        CheckConstraint(
            "(is_booked AND owner IS NOT NULL) OR (NOT is_booked AND owner IS NULL)",
            name="check_seat_owner_matches_booked",
        ),
        # "My bookings" lookups
        Index("ix_seats_owner", "owner"),
    )

    def __repr__(self) -> str:
        return f"<SeatRecord(id={self.id}, row={self.row}, booked={self.is_booked}, owner={self.owner})>"
