"""
Finite state machine for a single booking submission.

Defines the submission states and explicit transitions with triggers.
Every submission follows a deterministic path through the state graph:

    EDITING -> VALIDATING -> REJECTED -> EDITING
                          -> PERSIST_FAILED -> EDITING   (store unreadable)
                          -> PERSISTING -> PERSISTED -> NOTIFYING -> DONE -> EDITING
                                        -> PERSIST_FAILED -> EDITING

Usage:
    sm = BookingStateMachine()
    sm.transition(BookingTrigger.SUBMITTED)
    assert sm.current_state == BookingState.VALIDATING
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class BookingState(str, Enum):
    """All possible states in a submission lifecycle."""
    EDITING = "editing"
    VALIDATING = "validating"
    REJECTED = "rejected"
    PERSISTING = "persisting"
    PERSISTED = "persisted"
    PERSIST_FAILED = "persist_failed"
    NOTIFYING = "notifying"
    DONE = "done"


class BookingTrigger(str, Enum):
    """Events that cause state transitions."""
    SUBMITTED = "submitted"
    VALIDATION_FAILED = "validation_failed"
    VALIDATION_PASSED = "validation_passed"
    STORE_UNAVAILABLE = "store_unavailable"
    EDIT_RESUMED = "edit_resumed"
    PERSIST_SUCCEEDED = "persist_succeeded"
    PERSIST_FAILED = "persist_failed"
    RETRY_ALLOWED = "retry_allowed"
    NOTIFICATIONS_DISPATCHED = "notifications_dispatched"
    CONFIRMED = "confirmed"
    FORM_RESET = "form_reset"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: BookingState
    to_state: BookingState
    trigger: BookingTrigger
    guard: Optional[Callable[[], bool]] = None


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: BookingState
    entered_at: datetime
    trigger: Optional[BookingTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class BookingStateMachine:
    """
    Deterministic state machine controlling a booking submission.

    Every transition must be explicitly defined. A workflow step that
    fires a trigger with no matching transition is rejected with a clear
    error listing the triggers allowed from the current state.
    """

    TRANSITIONS: list[Transition] = [
        # --- Submission ---
        Transition(BookingState.EDITING, BookingState.VALIDATING,
                   BookingTrigger.SUBMITTED),

        # --- Validation ---
        Transition(BookingState.VALIDATING, BookingState.REJECTED,
                   BookingTrigger.VALIDATION_FAILED),
        Transition(BookingState.VALIDATING, BookingState.PERSISTING,
                   BookingTrigger.VALIDATION_PASSED),
        Transition(BookingState.REJECTED, BookingState.EDITING,
                   BookingTrigger.EDIT_RESUMED),
        Transition(BookingState.VALIDATING, BookingState.PERSIST_FAILED,
                   BookingTrigger.STORE_UNAVAILABLE),

        # --- Persistence ---
        Transition(BookingState.PERSISTING, BookingState.PERSISTED,
                   BookingTrigger.PERSIST_SUCCEEDED),
        Transition(BookingState.PERSISTING, BookingState.PERSIST_FAILED,
                   BookingTrigger.PERSIST_FAILED),
        Transition(BookingState.PERSIST_FAILED, BookingState.EDITING,
                   BookingTrigger.RETRY_ALLOWED),

        # --- Side effects ---
        Transition(BookingState.PERSISTED, BookingState.NOTIFYING,
                   BookingTrigger.NOTIFICATIONS_DISPATCHED),
        Transition(BookingState.NOTIFYING, BookingState.DONE,
                   BookingTrigger.CONFIRMED),

        # --- Reset ---
        Transition(BookingState.DONE, BookingState.EDITING,
                   BookingTrigger.FORM_RESET),
    ]

    def __init__(self) -> None:
        self._current_state = BookingState.EDITING
        self._history: list[StateEntry] = [
            StateEntry(state=BookingState.EDITING, entered_at=datetime.now(timezone.utc))
        ]
        self._failure_count: int = 0

    @property
    def current_state(self) -> BookingState:
        return self._current_state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def transition(self, trigger: BookingTrigger) -> BookingState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new submission state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                if t.guard is not None and not t.guard():
                    continue

                old_state = self._current_state
                self._current_state = t.to_state

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                if t.to_state in (BookingState.REJECTED, BookingState.PERSIST_FAILED):
                    self._failure_count += 1

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[BookingTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_editing(self) -> bool:
        """Check if the form is open for input (no submission in flight)."""
        return self._current_state == BookingState.EDITING
