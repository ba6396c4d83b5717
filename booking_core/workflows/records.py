"""Store reads shared by the booking and moderation workflows.

Display reads degrade rather than fail: a StoreError yields an empty list
and a warning. The availability re-check before a booking write passes
``degrade=False`` so an unreadable store can never look like an empty
one. Records that cannot be decoded are skipped individually either way.
"""

import logging
from typing import Callable, TypeVar

from booking_core.scheduling.slot_generator import parse_time
from booking_core.schemas.booking_schema import (
    BLOCKED_TIMES_COLLECTION,
    BOOKINGS_COLLECTION,
    BlockedSlot,
    Booking,
    DecodeError,
    decode_blocked_slot,
    decode_booking,
)
from booking_core.store.base import RecordStore, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", Booking, BlockedSlot)


async def _load(
    store: RecordStore, collection: str, decode: Callable[[dict], T], degrade: bool
) -> list[T]:
    try:
        raw_records = await store.list_all(collection)
    except StoreError as exc:
        if not degrade:
            raise
        logger.warning("Could not read '%s'; showing none: %s", collection, exc)
        return []

    decoded: list[T] = []
    for raw in raw_records:
        try:
            decoded.append(decode(raw))
        except DecodeError as exc:
            logger.warning("Skipping record: %s", exc)
    return decoded


async def load_bookings(store: RecordStore, degrade: bool = True) -> list[Booking]:
    """
    Raises:
        StoreError: Only when ``degrade`` is False.
    """
    return await _load(store, BOOKINGS_COLLECTION, decode_booking, degrade)


async def load_blocked_slots(store: RecordStore, degrade: bool = True) -> list[BlockedSlot]:
    return await _load(store, BLOCKED_TIMES_COLLECTION, decode_blocked_slot, degrade)


def sort_by_slot(records: list[T]) -> list[T]:
    """Order by date, then time of day (not by the 12-hour string)."""
    return sorted(records, key=lambda r: (r.date, parse_time(r.time)))
