"""
Redis-backed seat snapshots.

The whole car is stored as one JSON array under a single key:
  [{"id": 1, "row": 1, "position_in_row": 1, "is_booked": false, "owner": null}, ...]

Writes replace the key (last write wins). A value that does not decode to
a complete, valid car is reported as absent so the caller starts from a
fresh car instead of failing.
"""

from typing import Optional

import redis.asyncio as redis

from train_booking.core.logging import get_logger
from train_booking.core.metrics import record_snapshot_load
from train_booking.models.seat import SeatState
from train_booking.schemas.seat import decode_snapshot, encode_snapshot
from train_booking.services.interfaces.snapshot_store import SnapshotStore

logger = get_logger(__name__)


class RedisSnapshotStore(SnapshotStore):
    backend = "redis"

    def __init__(self, client: redis.Redis, key: str):
        self.redis = client
        self.key = key

    async def load(self) -> Optional[SeatState]:
        raw = await self.redis.get(self.key)
        if raw is None:
            record_snapshot_load(self.backend, "empty")
            return None

        state = decode_snapshot(raw)
        if state is None:
            logger.warning("snapshot_invalid", backend=self.backend, key=self.key)
            record_snapshot_load(self.backend, "invalid")
            return None

        record_snapshot_load(self.backend, "hit")
        return state

    async def save(self, state: SeatState) -> None:
        await self.redis.set(self.key, encode_snapshot(state))
        logger.debug("snapshot_saved", backend=self.backend, key=self.key)
