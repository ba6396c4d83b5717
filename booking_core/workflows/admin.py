"""
Admin moderation: list bookings and blocked times, delete bookings,
block and unblock slots.

Every operation is authorized through the AdminSession passed in at
construction; a caller that is not the admin identity gets
AccessDeniedError before the store is touched.
"""

from datetime import date
from typing import Optional, TypedDict, Union

from booking_core.auth.session import AdminSession
from booking_core.logging_context import get_request_logger, new_request_id
from booking_core.scheduling.slot_generator import is_on_grid, normalize_time
from booking_core.schemas.booking_schema import (
    BLOCKED_TIMES_COLLECTION,
    BOOKINGS_COLLECTION,
    BlockedSlot,
    Booking,
)
from booking_core.store.base import RecordStore, StoreError
from booking_core.utils import parse_date
from booking_core.workflows.records import load_blocked_slots, load_bookings, sort_by_slot

logger = get_request_logger(__name__)

MSG_BLOCK_INCOMPLETE = "Please select both a date and a time to block."
MSG_BLOCK_BAD_DATE = "Please select a valid date."
MSG_BLOCK_BAD_TIME = "Please select one of the listed times."


class ModerationResult(TypedDict, total=False):
    """Result of a moderation action."""

    success: bool
    message: str
    blocked_slots: list[BlockedSlot]


class AdminModerationWorkflow:
    """Operator-facing booking and blocked-time management."""

    def __init__(self, store: RecordStore, session: AdminSession) -> None:
        self._store = store
        self._session = session

    def _authorize(self, action: str) -> None:
        user = self._session.require_admin()
        new_request_id("ADM")
        logger.debug("%s by %s", action, user.email)

    async def list_bookings(self) -> list[Booking]:
        """All bookings, earliest slot first."""
        self._authorize("list_bookings")
        return sort_by_slot(await load_bookings(self._store))

    async def list_blocked_slots(self) -> list[BlockedSlot]:
        self._authorize("list_blocked_slots")
        return sort_by_slot(await load_blocked_slots(self._store))

    async def delete_booking(self, booking_id: str) -> ModerationResult:
        """Delete a booking; an id that is already gone counts as deleted."""
        self._authorize("delete_booking")
        try:
            await self._store.delete_by_id(BOOKINGS_COLLECTION, booking_id)
        except StoreError as exc:
            logger.error("Error deleting appointment %s: %s", booking_id, exc)
            return {"success": False, "message": "Could not delete the appointment. Please try again."}
        logger.info("Appointment %s deleted", booking_id)
        return {"success": True, "message": "Appointment deleted."}

    async def add_blocked_slot(
        self, day: Union[date, str, None], time: Optional[str]
    ) -> ModerationResult:
        """Close a slot for booking and return the refreshed blocked list."""
        self._authorize("add_blocked_slot")
        if not day or not time:
            return {"success": False, "message": MSG_BLOCK_INCOMPLETE}
        try:
            block_date = parse_date(day)
        except ValueError:
            return {"success": False, "message": MSG_BLOCK_BAD_DATE}
        if not is_on_grid(time):
            return {"success": False, "message": MSG_BLOCK_BAD_TIME}

        block = BlockedSlot(date=block_date, time=normalize_time(time))
        existing = sort_by_slot(await load_blocked_slots(self._store))
        if any(b.slot_key == block.slot_key for b in existing):
            logger.info("Slot %s already blocked", block.slot_key)
            return {
                "success": True,
                "message": f"{block.date} at {block.time} is already blocked.",
                "blocked_slots": existing,
            }

        try:
            await self._store.insert(BLOCKED_TIMES_COLLECTION, block.to_record())
        except StoreError as exc:
            logger.error("Error blocking time slot %s: %s", block.slot_key, exc)
            return {"success": False, "message": "Could not block the time slot. Please try again."}

        logger.info("Blocked %s at %s", block.date, block.time)
        return {
            "success": True,
            "message": f"Blocked {block.date} at {block.time}",
            "blocked_slots": sort_by_slot(await load_blocked_slots(self._store)),
        }

    async def remove_blocked_slot(self, slot_id: str) -> ModerationResult:
        self._authorize("remove_blocked_slot")
        try:
            await self._store.delete_by_id(BLOCKED_TIMES_COLLECTION, slot_id)
        except StoreError as exc:
            logger.error("Error unblocking time slot %s: %s", slot_id, exc)
            return {"success": False, "message": "Could not unblock the time slot. Please try again."}
        logger.info("Blocked slot %s removed", slot_id)
        return {"success": True, "message": "Time slot unblocked!"}
