"""
Tests for booking/cancellation transitions and the booking request policy.
"""

import pytest

from train_booking.core.errors import (
    IncompleteSelectionError,
    InvalidCountError,
    NoBlockAvailableError,
    NotOwnerError,
    OversizedSelectionError,
    ReasonCode,
    SeatConflictError,
    SeatNotBookedError,
    SeatNotFoundError,
    SelectionStaleError,
)
from train_booking.models.seat import initial_state
from train_booking.services.booking_service import (
    BookingRequest,
    book,
    cancel,
    list_bookings_for,
    submit_booking,
    submit_cancellation,
)

X = "x@example.com"
Y = "y@example.com"


class TestBook:
    def test_marks_only_requested_seats(self, fresh_car):
        state = book(fresh_car, {3, 4}, X)
        assert [seat.id for seat in state if seat.is_booked] == [3, 4]
        assert state[2].owner == X and state[3].owner == X
        assert state[0] == fresh_car[0]

    def test_returns_new_state_without_touching_input(self, fresh_car):
        state = book(fresh_car, {1}, X)
        assert state is not fresh_car
        assert not fresh_car[0].is_booked

    def test_already_booked_seat_is_a_conflict(self, first_row_full):
        with pytest.raises(SeatConflictError) as exc_info:
            book(first_row_full, {7, 8}, Y)
        assert exc_info.value.context["seat_ids"] == [7]
        assert exc_info.value.reason == ReasonCode.CONFLICT

    def test_unknown_seat(self, fresh_car):
        with pytest.raises(SeatNotFoundError):
            book(fresh_car, {0}, X)

    def test_bool_is_not_a_seat_id(self, fresh_car):
        with pytest.raises(SeatNotFoundError):
            book(fresh_car, {True}, X)


class TestCancel:
    def test_owner_cancels(self):
        state = book(initial_state(), {1, 2}, X)
        outcome = cancel(state, 1, X)
        assert outcome.ok
        assert not outcome.value[0].is_booked
        assert outcome.value[0].owner is None
        assert outcome.value[1].owner == X

    def test_other_user_cannot_cancel(self):
        state = book(initial_state(), {1, 2}, X)
        outcome = cancel(state, 1, Y)
        assert isinstance(outcome.error, NotOwnerError)
        assert state[0].owner == X

    def test_cancel_free_seat(self, fresh_car):
        assert isinstance(cancel(fresh_car, 5, X).error, SeatNotBookedError)

    def test_cancel_twice(self):
        state = book(initial_state(), {5}, X)
        first = cancel(state, 5, X)
        assert first.ok
        second = cancel(first.value, 5, X)
        assert isinstance(second.error, SeatNotBookedError)

    def test_book_then_cancel_restores_seat(self, fresh_car):
        booked = book(fresh_car, {12}, X)
        restored = cancel(booked, 12, X).unwrap()
        assert restored[11] == fresh_car[11]
        assert restored == fresh_car

    def test_cancel_unknown_seat(self, fresh_car):
        assert isinstance(cancel(fresh_car, 99, X).error, SeatNotFoundError)


class TestSubmitBooking:
    def test_auto_on_fresh_car(self, fresh_car):
        outcome = submit_booking(fresh_car, BookingRequest.auto(X, 3))
        assert outcome.ok
        assert outcome.value.seat_ids == {1, 2, 3}
        assert {seat.id for seat in outcome.value.state if seat.owner == X} == {1, 2, 3}

    def test_auto_skips_full_row(self, first_row_full):
        outcome = submit_booking(first_row_full, BookingRequest.auto(X, 2))
        assert outcome.value.seat_ids == {8, 9}

    def test_auto_no_block(self):
        state = book(initial_state(), range(2, 81, 2), X)
        outcome = submit_booking(state, BookingRequest.auto(Y, 2))
        assert isinstance(outcome.error, NoBlockAvailableError)

    @pytest.mark.parametrize("count", [0, 8])
    def test_auto_invalid_count(self, fresh_car, count):
        outcome = submit_booking(fresh_car, BookingRequest.auto(X, count))
        assert isinstance(outcome.error, InvalidCountError)

    def test_manual_selection(self, fresh_car):
        outcome = submit_booking(fresh_car, BookingRequest.manual(X, {10, 30}))
        assert outcome.value.seat_ids == {10, 30}

    def test_manual_selection_of_matching_count(self, fresh_car):
        request = BookingRequest(user=X, count=2, seat_ids=frozenset({5, 6}))
        assert submit_booking(fresh_car, request).value.seat_ids == {5, 6}

    def test_stale_selection(self):
        state = book(initial_state(), {6}, Y)
        outcome = submit_booking(state, BookingRequest.manual(X, {5, 6}))
        assert isinstance(outcome.error, SelectionStaleError)
        assert outcome.error.context["seat_ids"] == [6]

    def test_manual_unknown_seat(self, fresh_car):
        outcome = submit_booking(fresh_car, BookingRequest.manual(X, {80, 81}))
        assert isinstance(outcome.error, SeatNotFoundError)

    def test_incomplete_selection_rejected(self, fresh_car):
        request = BookingRequest(user=X, count=3, seat_ids=frozenset({5, 6}))
        outcome = submit_booking(fresh_car, request)
        assert isinstance(outcome.error, IncompleteSelectionError)
        assert outcome.error.context == {"selected": 2, "requested": 3}

    def test_incomplete_selection_with_fallback_uses_auto(self, fresh_car):
        request = BookingRequest(user=X, count=3, seat_ids=frozenset({5, 6}))
        outcome = submit_booking(fresh_car, request, allow_partial_fallback=True)
        assert outcome.value.seat_ids == {1, 2, 3}

    def test_oversized_selection(self, fresh_car):
        request = BookingRequest(user=X, count=1, seat_ids=frozenset({5, 6}))
        assert isinstance(submit_booking(fresh_car, request).error, OversizedSelectionError)

    def test_manual_selection_of_more_than_seven(self, fresh_car):
        outcome = submit_booking(fresh_car, BookingRequest.manual(X, range(1, 9)))
        assert isinstance(outcome.error, InvalidCountError)

    def test_empty_manual_selection(self, fresh_car):
        outcome = submit_booking(fresh_car, BookingRequest.manual(X, []))
        assert isinstance(outcome.error, InvalidCountError)

    def test_failure_leaves_state_unchanged(self):
        state = book(initial_state(), range(1, 8), X)
        before = tuple(state)

        outcome = submit_booking(state, BookingRequest.manual(Y, {7}))

        assert isinstance(outcome.error, SelectionStaleError)
        assert state == before
        assert state[6].owner == X


def test_submit_cancellation_scenario():
    state = submit_booking(initial_state(), BookingRequest.manual(X, {1, 2})).unwrap().state
    assert isinstance(submit_cancellation(state, 1, Y).error, NotOwnerError)
    state = submit_cancellation(state, 1, X).unwrap()
    assert not state[0].is_booked
    assert state[1].owner == X


def test_list_bookings_for():
    state = book(initial_state(), {30, 2, 15}, X)
    state = book(state, {3}, Y)
    assert [seat.id for seat in list_bookings_for(state, X)] == [2, 15, 30]
    assert [seat.id for seat in list_bookings_for(state, Y)] == [3]
    assert list_bookings_for(state, "nobody@example.com") == ()


def test_booking_request_mode():
    assert BookingRequest.auto(X, 2).mode == "auto"
    assert BookingRequest.manual(X, {1}).mode == "manual"
    assert BookingRequest.manual(X, {1, 2}).count == 2
