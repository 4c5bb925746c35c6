"""
In-memory snapshot store - no external system.
State lives as long as the process does.
"""

from typing import Optional

from train_booking.core.metrics import record_snapshot_load
from train_booking.models.seat import SeatState
from train_booking.services.interfaces.snapshot_store import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """
    Keeps the latest state in a Python attribute.

    Use when:
    - Running tests
    - A single process serves the car and losing state on restart is fine
    - Redis was requested but is unreachable
    """

    backend = "memory"

    def __init__(self, state: Optional[SeatState] = None):
        self._state = state

    async def load(self) -> Optional[SeatState]:
        record_snapshot_load(self.backend, "empty" if self._state is None else "hit")
        return self._state

    async def save(self, state: SeatState) -> None:
        self._state = state

    def clear(self) -> None:
        self._state = None
