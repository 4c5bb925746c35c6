"""
Reservation service: the session boundary around the seat core.

CONCURRENCY STRATEGY: One lock per car
======================================

Problem:
  Two users pick seat 12 at the same time. Both load a state where it is
  free, both book it, the second save overwrites the first.

Solution:
  Every mutating call runs load -> decide -> save while holding one
  asyncio.Lock shared by all requests in the process. The state a
  decision is based on is therefore always the latest saved one, and a
  hand-picked selection is re-validated against it right before commit.

  A selection that went stale while the user was choosing comes back as
  SelectionStaleError; a commit that still finds a seat taken (only
  possible when another process writes the same store) comes back as the
  retryable SeatConflictError.

  The lock covers one process. Several workers sharing one store need a
  store-level guard as well.
"""

import asyncio
import time
from collections.abc import Iterable
from typing import Optional

from train_booking.core.errors import AuthenticationRequiredError, ReasonCode
from train_booking.core.logging import get_logger
from train_booking.core.metrics import (
    booking_latency,
    record_booking_attempt,
    record_cancellation,
    seats_booked,
)
from train_booking.core.result import Outcome
from train_booking.models.seat import Seat, SeatState, booked_count, initial_state
from train_booking.services.booking_service import (
    Allocation,
    BookingRequest,
    list_bookings_for,
    submit_booking,
    submit_cancellation,
)
from train_booking.services.interfaces.snapshot_store import SnapshotStore

logger = get_logger(__name__)

CONFLICT_REASONS = {ReasonCode.CONFLICT, ReasonCode.SELECTION_STALE}


class SessionBoundary:
    """Who is acting, and where the car's state is loaded from and saved to."""

    def __init__(self, user: Optional[str], store: SnapshotStore):
        self._user = user
        self.store = store

    def get_current_user(self) -> Optional[str]:
        return self._user

    async def load_snapshot(self) -> Optional[SeatState]:
        return await self.store.load()

    async def save_snapshot(self, state: SeatState) -> None:
        await self.store.save(state)


class ReservationService:
    def __init__(
        self,
        session: SessionBoundary,
        lock: asyncio.Lock,
        allow_partial_fallback: bool = False,
    ):
        self.session = session
        self.lock = lock
        self.allow_partial_fallback = allow_partial_fallback

    def _require_user(self) -> str:
        user = self.session.get_current_user()
        if not user:
            raise AuthenticationRequiredError()
        return user

    async def current_state(self) -> SeatState:
        """Saved state, or a fresh car when nothing valid is stored."""
        state = await self.session.load_snapshot()
        if state is None:
            logger.info("seat_state_initialized", backend=self.session.store.backend)
            return initial_state()
        return state

    async def book(self, count: int, seat_ids: Iterable[int] = ()) -> Outcome[Allocation]:
        user = self._require_user()
        request = BookingRequest(user=user, count=count, seat_ids=frozenset(seat_ids))
        start_time = time.perf_counter()

        async with self.lock:
            state = await self.current_state()
            outcome = submit_booking(state, request, self.allow_partial_fallback)
            if outcome.ok:
                await self.session.save_snapshot(outcome.value.state)
                seats_booked.set(booked_count(outcome.value.state))

        booking_latency.observe(time.perf_counter() - start_time)
        if outcome.ok:
            record_booking_attempt("success", request.mode)
        elif outcome.error.reason in CONFLICT_REASONS:
            record_booking_attempt("conflict", request.mode)
        else:
            record_booking_attempt("rejected", request.mode)
        return outcome

    async def cancel(self, seat_id: int) -> Outcome[SeatState]:
        user = self._require_user()

        async with self.lock:
            state = await self.current_state()
            outcome = submit_cancellation(state, seat_id, user)
            if outcome.ok:
                await self.session.save_snapshot(outcome.value)
                seats_booked.set(booked_count(outcome.value))

        record_cancellation(outcome.ok)
        return outcome

    async def my_bookings(self) -> tuple[Seat, ...]:
        user = self._require_user()
        return list_bookings_for(await self.current_state(), user)

    async def seat_map(self) -> SeatState:
        return await self.current_state()
