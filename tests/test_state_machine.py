"""Tests for the booking submission state machine."""

import pytest

from booking_core.scheduling.state_machine import (
    BookingState,
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
)


@pytest.fixture
def state_machine():
    return BookingStateMachine()


class TestInitialState:
    def test_starts_editing(self, state_machine):
        assert state_machine.current_state == BookingState.EDITING
        assert state_machine.is_editing()

    def test_initial_history_has_one_entry(self, state_machine):
        assert len(state_machine.get_history()) == 1

    def test_initial_failure_count_is_zero(self, state_machine):
        assert state_machine.failure_count == 0


class TestSubmission:
    def test_submit_goes_to_validating(self, state_machine):
        assert state_machine.transition(BookingTrigger.SUBMITTED) == BookingState.VALIDATING

    def test_cannot_persist_from_editing(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="Valid triggers"):
            state_machine.transition(BookingTrigger.PERSIST_SUCCEEDED)

    def test_cannot_submit_twice(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(BookingTrigger.SUBMITTED)


class TestPaths:
    def test_happy_path(self, state_machine):
        for trigger in (
            BookingTrigger.SUBMITTED,
            BookingTrigger.VALIDATION_PASSED,
            BookingTrigger.PERSIST_SUCCEEDED,
            BookingTrigger.NOTIFICATIONS_DISPATCHED,
            BookingTrigger.CONFIRMED,
            BookingTrigger.FORM_RESET,
        ):
            state_machine.transition(trigger)
        assert state_machine.get_state_trace() == [
            "editing", "validating", "persisting", "persisted", "notifying", "done", "editing",
        ]
        assert state_machine.failure_count == 0

    def test_rejection_returns_to_editing(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        assert state_machine.transition(BookingTrigger.VALIDATION_FAILED) == BookingState.REJECTED
        assert state_machine.transition(BookingTrigger.EDIT_RESUMED) == BookingState.EDITING
        assert state_machine.failure_count == 1

    def test_persist_failure_returns_to_editing(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        state_machine.transition(BookingTrigger.VALIDATION_PASSED)
        assert state_machine.transition(BookingTrigger.PERSIST_FAILED) == BookingState.PERSIST_FAILED
        assert state_machine.transition(BookingTrigger.RETRY_ALLOWED) == BookingState.EDITING
        assert state_machine.failure_count == 1

    def test_no_notification_before_persist(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        state_machine.transition(BookingTrigger.VALIDATION_PASSED)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(BookingTrigger.NOTIFICATIONS_DISPATCHED)

    def test_history_records_triggers(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        last = state_machine.get_history()[-1]
        assert last.trigger == BookingTrigger.SUBMITTED
        assert last.state == BookingState.VALIDATING

    def test_valid_triggers_from_validating(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        assert set(state_machine.get_valid_triggers()) == {
            BookingTrigger.VALIDATION_FAILED,
            BookingTrigger.VALIDATION_PASSED,
            BookingTrigger.STORE_UNAVAILABLE,
        }

    def test_unreadable_store_during_validation_allows_retry(self, state_machine):
        state_machine.transition(BookingTrigger.SUBMITTED)
        assert state_machine.transition(BookingTrigger.STORE_UNAVAILABLE) == BookingState.PERSIST_FAILED
        assert state_machine.failure_count == 1
        assert state_machine.transition(BookingTrigger.RETRY_ALLOWED) == BookingState.EDITING
