"""
Snapshot store factory.
Configures where seat state is kept between requests.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from train_booking.core.config import get_settings
from train_booking.core.logging import get_logger
from train_booking.infrastructure.redis_client import get_redis
from train_booking.services.db_snapshot_store import DatabaseSnapshotStore
from train_booking.services.interfaces.memory_snapshot_store import InMemorySnapshotStore
from train_booking.services.interfaces.snapshot_store import SnapshotStore
from train_booking.services.redis_snapshot_store import RedisSnapshotStore

logger = get_logger(__name__)

SNAPSHOT_BACKENDS = ("database", "redis", "memory")

# Singleton for the memory backend
_memory_store: Optional[InMemorySnapshotStore] = None


def get_memory_store() -> InMemorySnapshotStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemorySnapshotStore()
    return _memory_store


async def create_snapshot_store(db: AsyncSession) -> SnapshotStore:
    """
    Build the store selected by SNAPSHOT_BACKEND.

    - database: `seats` table through the request's session
    - redis: JSON document in Redis; memory when Redis is unavailable
    - memory: process-local singleton
    """
    settings = get_settings()
    backend = settings.SNAPSHOT_BACKEND.lower()

    if backend == "database":
        return DatabaseSnapshotStore(db)

    if backend == "redis":
        client = await get_redis()
        if client is not None:
            return RedisSnapshotStore(client, settings.SNAPSHOT_REDIS_KEY)
        logger.warning("snapshot_store_fallback", requested="redis", using="memory")
        return get_memory_store()

    if backend == "memory":
        return get_memory_store()

    raise ValueError(
        f"Unknown SNAPSHOT_BACKEND {settings.SNAPSHOT_BACKEND!r}; expected one of {SNAPSHOT_BACKENDS}"
    )
