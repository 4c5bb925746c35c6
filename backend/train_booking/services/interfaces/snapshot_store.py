"""
Seat snapshot store interface.
Allows swapping where the car's seat state lives between requests.
"""

from abc import ABC, abstractmethod
from typing import Optional

from train_booking.models.seat import SeatState


class SnapshotStore(ABC):
    """
    Interface for seat snapshot persistence.

    Implementations:
    - InMemorySnapshotStore: process-local, for tests and single-device runs
    - RedisSnapshotStore: one JSON document under a single key
    - DatabaseSnapshotStore: one row per seat in the `seats` table
    """

    backend: str = "abstract"

    @abstractmethod
    async def load(self) -> Optional[SeatState]:
        """
        Load the last saved state.

        Returns:
            The stored SeatState, or None when nothing is stored or the
            stored data is not a complete, valid car.
        """
        pass

    @abstractmethod
    async def save(self, state: SeatState) -> None:
        """
        Replace the stored state. Last write wins.

        Args:
            state: Full seat state to persist
        """
        pass
