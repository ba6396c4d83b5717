"""
Booking workflow: one public submission, end to end.

Validate (with a fresh availability re-check) -> persist -> dispatch
notifications -> confirm. The form is kept on every failure path so the
customer can correct or retry without re-entering it, and cleared only
after a successful booking. One submission runs at a time per workflow; a
submit while another is in flight is refused, not queued.

The availability re-check reads the store before the insert, and nothing
makes the two atomic. Unless unique slots are enforced, two concurrent
submissions for one slot can both succeed. With unique slots the booking
is created under its slot key and the store rejects the second writer.
"""

from datetime import date, datetime, timezone
from typing import Callable, Optional, TypedDict, Union

from booking_core.catalog import get_service_name
from booking_core.config import settings
from booking_core.logging_context import get_request_logger, new_request_id
from booking_core.notifications.dispatcher import DISPLAY_DATE_FORMAT, NotificationDispatcher
from booking_core.scheduling.availability import AvailabilitySnapshot, available_slots
from booking_core.scheduling.state_machine import BookingState, BookingStateMachine, BookingTrigger
from booking_core.scheduling.validation import (
    MSG_TIME_TAKEN,
    ValidationError,
    validate_booking_request,
)
from booking_core.schemas.booking_schema import BOOKINGS_COLLECTION, Booking, BookingRequest
from booking_core.store.base import RecordStore, SlotConflictError, StoreError
from booking_core.workflows.records import load_blocked_slots, load_bookings

logger = get_request_logger(__name__)

MSG_FIX_FIELDS = "Please correct the highlighted fields."
MSG_PERSIST_FAILED = "Something went wrong. Please try again later."
MSG_IN_PROGRESS = "Your booking is already being submitted. Please wait."


class BookingOutcome(TypedDict, total=False):
    """Result of a single submission."""

    success: bool
    message: str
    errors: dict[str, str]
    booking: Booking


class BookingWorkflow:
    """Submission orchestrator for the public booking form."""

    def __init__(
        self,
        store: RecordStore,
        notifier: NotificationDispatcher,
        today: Callable[[], date] = date.today,
        enforce_unique_slots: Optional[bool] = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._today = today
        self._enforce_unique_slots = (
            settings.booking.enforce_unique_slots
            if enforce_unique_slots is None
            else enforce_unique_slots
        )
        self._sm = BookingStateMachine()
        self._form = BookingRequest()

    @property
    def state(self) -> BookingState:
        return self._sm.current_state

    @property
    def state_machine(self) -> BookingStateMachine:
        return self._sm

    @property
    def form(self) -> BookingRequest:
        return self._form

    def update_form(self, **changes: object) -> BookingRequest:
        """
        Apply edits to the retained form.

        Values are coerced as on construction (an ISO date string becomes
        a date).

        Raises:
            pydantic.ValidationError: If a value cannot be coerced.
        """
        self._form = BookingRequest.model_validate({**self._form.model_dump(), **changes})
        return self._form

    async def load_snapshot(self, degrade: bool = True) -> AvailabilitySnapshot:
        bookings = await load_bookings(self._store, degrade=degrade)
        blocked = await load_blocked_slots(self._store, degrade=degrade)
        return AvailabilitySnapshot.from_records(bookings, blocked)

    async def available_times(self, day: Union[date, str]) -> list[str]:
        """Open times for a date, for presentation."""
        return available_slots(day, await self.load_snapshot(), self._today())

    async def submit(self, request: Optional[BookingRequest] = None) -> BookingOutcome:
        """Run one submission through the state machine."""
        if not self._sm.is_editing():
            logger.info("Submission ignored: another is in progress (%s)", self.state.value)
            return {"success": False, "message": MSG_IN_PROGRESS, "errors": {}}

        request = request if request is not None else self._form
        self._form = request
        new_request_id("BOOK")
        self._sm.transition(BookingTrigger.SUBMITTED)
        logger.info("Booking submission started")

        try:
            await self._validate(request)
        except ValidationError as exc:
            self._sm.transition(BookingTrigger.VALIDATION_FAILED)
            self._sm.transition(BookingTrigger.EDIT_RESUMED)
            logger.info("Submission rejected: %s", sorted(exc.errors))
            return {"success": False, "message": MSG_FIX_FIELDS, "errors": exc.errors}
        except StoreError as exc:
            self._sm.transition(BookingTrigger.STORE_UNAVAILABLE)
            self._sm.transition(BookingTrigger.RETRY_ALLOWED)
            logger.error("Availability could not be re-checked: %s", exc)
            return {"success": False, "message": MSG_PERSIST_FAILED, "errors": {}}

        self._sm.transition(BookingTrigger.VALIDATION_PASSED)
        try:
            booking = await self._persist(request)
        except SlotConflictError:
            self._fail_persist()
            logger.warning("Submission lost the race for its slot")
            return {"success": False, "message": MSG_TIME_TAKEN, "errors": {"time": MSG_TIME_TAKEN}}
        except StoreError as exc:
            self._fail_persist()
            logger.error("Submission could not be saved: %s", exc)
            return {"success": False, "message": MSG_PERSIST_FAILED, "errors": {}}

        self._sm.transition(BookingTrigger.PERSIST_SUCCEEDED)
        self._notifier.dispatch_booking_notifications(booking)
        self._sm.transition(BookingTrigger.NOTIFICATIONS_DISPATCHED)
        self._sm.transition(BookingTrigger.CONFIRMED)

        service = get_service_name(booking.service) or booking.service
        message = (
            f"You have booked {service} on "
            f"{booking.date.strftime(DISPLAY_DATE_FORMAT)} at {booking.time}."
        )
        logger.info("Booking %s created for %s %s", booking.id, booking.date, booking.time)

        self._form = BookingRequest()
        self._sm.transition(BookingTrigger.FORM_RESET)
        return {"success": True, "message": message, "errors": {}, "booking": booking}

    async def _validate(self, request: BookingRequest) -> None:
        # A failed read raises StoreError rather than passing as empty
        snapshot = await self.load_snapshot(degrade=False)
        errors = validate_booking_request(request, snapshot, self._today())
        if errors:
            raise ValidationError(errors)

    async def _persist(self, request: BookingRequest) -> Booking:
        booking = Booking(
            service=request.service.strip(),
            name=request.name.strip(),
            email=request.email.strip(),
            phone=request.phone.strip(),
            notes=request.notes.strip(),
            date=request.date,
            time=request.time,
            created_at=datetime.now(timezone.utc),
        )
        key = booking.slot_key if self._enforce_unique_slots else None
        record_id = await self._store.insert(BOOKINGS_COLLECTION, booking.to_record(), key=key)
        return booking.model_copy(update={"id": record_id})

    def _fail_persist(self) -> None:
        self._sm.transition(BookingTrigger.PERSIST_FAILED)
        self._sm.transition(BookingTrigger.RETRY_ALLOWED)
