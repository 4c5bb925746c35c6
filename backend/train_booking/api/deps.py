"""
Request-scoped dependencies wiring the reservation service together.
"""

import asyncio
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from train_booking.core.config import get_settings
from train_booking.core.security import get_current_user
from train_booking.db.session import get_db
from train_booking.services.interfaces.snapshot_store import SnapshotStore
from train_booking.services.reservation_service import ReservationService, SessionBoundary
from train_booking.services.store_factory import create_snapshot_store

_car_lock: Optional[asyncio.Lock] = None


def get_car_lock() -> asyncio.Lock:
    """The process-wide lock serializing seat state changes."""
    global _car_lock
    if _car_lock is None:
        _car_lock = asyncio.Lock()
    return _car_lock


async def get_snapshot_store(db: AsyncSession = Depends(get_db)) -> SnapshotStore:
    return await create_snapshot_store(db)


async def get_reservation_service(
    user: str = Depends(get_current_user),
    store: SnapshotStore = Depends(get_snapshot_store),
    lock: asyncio.Lock = Depends(get_car_lock),
) -> ReservationService:
    return ReservationService(
        SessionBoundary(user, store),
        lock,
        allow_partial_fallback=get_settings().PARTIAL_SELECTION_FALLBACK,
    )


async def get_seat_map_service(
    store: SnapshotStore = Depends(get_snapshot_store),
    lock: asyncio.Lock = Depends(get_car_lock),
) -> ReservationService:
    """Read-only access to the car; no user required."""
    return ReservationService(SessionBoundary(None, store), lock)
