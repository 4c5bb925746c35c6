"""
Database-backed seat snapshots: one `seats` row per seat.

Saving writes only the rows whose booking fields changed and commits
immediately, so the write is durable before the car lock is released.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from train_booking.core.logging import get_logger
from train_booking.core.metrics import record_snapshot_load
from train_booking.models.seat import SeatState
from train_booking.models.seat_record import SeatRecord
from train_booking.schemas.seat import state_from_records
from train_booking.services.interfaces.snapshot_store import SnapshotStore

logger = get_logger(__name__)


class DatabaseSnapshotStore(SnapshotStore):
    backend = "database"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _records(self) -> list[SeatRecord]:
        result = await self.db.execute(select(SeatRecord).order_by(SeatRecord.id))
        return list(result.scalars().all())

    async def load(self) -> Optional[SeatState]:
        records = await self._records()
        if not records:
            record_snapshot_load(self.backend, "empty")
            return None

        state = state_from_records(records)
        if state is None:
            logger.warning("snapshot_invalid", backend=self.backend, rows=len(records))
            record_snapshot_load(self.backend, "invalid")
            return None

        record_snapshot_load(self.backend, "hit")
        return state

    async def save(self, state: SeatState) -> None:
        existing = {record.id: record for record in await self._records()}
        changed = 0

        for seat in state:
            record = existing.get(seat.id)
            if record is None:
                self.db.add(
                    SeatRecord(
                        id=seat.id,
                        row=seat.row,
                        position_in_row=seat.position_in_row,
                        is_booked=seat.is_booked,
                        owner=seat.owner,
                    )
                )
                changed += 1
                continue

            fields = (record.row, record.position_in_row, record.is_booked, record.owner)
            if fields != (seat.row, seat.position_in_row, seat.is_booked, seat.owner):
                record.row = seat.row
                record.position_in_row = seat.position_in_row
                record.is_booked = seat.is_booked
                record.owner = seat.owner
                changed += 1

        await self.db.commit()
        logger.debug("snapshot_saved", backend=self.backend, rows_changed=changed)
