"""
Slot availability against a snapshot of bookings and blocked times.

Availability is a pure function of (candidate slot, bookings, blocked
slots): a slot is taken when its normalized (date, time) pair matches any
existing booking or blocked slot. There is no duration or overlap model;
every slot is an atomic unit.

The snapshot is only as fresh as the store read that produced it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional, Union

from booking_core.scheduling.slot_generator import is_weekday, normalize_time, slot_labels
from booking_core.utils import normalize_date, parse_date

if TYPE_CHECKING:
    from booking_core.schemas.booking_schema import BlockedSlot, Booking

logger = logging.getLogger(__name__)

SlotPair = tuple[str, str]


def _slot_pair(record_date: Union[date, str], record_time: str) -> Optional[SlotPair]:
    """Normalized (date, time) for a stored record, or None if malformed."""
    try:
        return normalize_date(record_date), normalize_time(record_time)
    except (ValueError, TypeError) as exc:
        logger.warning(
            "Ignoring record with malformed slot %r %r: %s", record_date, record_time, exc
        )
        return None


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """Point-in-time view of the records that occupy slots."""

    bookings: tuple[Booking, ...] = ()
    blocked_slots: tuple[BlockedSlot, ...] = ()
    taken: frozenset[SlotPair] = field(init=False)

    def __post_init__(self) -> None:
        pairs = (
            _slot_pair(r.date, r.time)
            for r in (*self.bookings, *self.blocked_slots)
        )
        object.__setattr__(self, "taken", frozenset(p for p in pairs if p is not None))

    @classmethod
    def from_records(
        cls,
        bookings: Iterable[Booking] = (),
        blocked_slots: Iterable[BlockedSlot] = (),
    ) -> AvailabilitySnapshot:
        return cls(bookings=tuple(bookings), blocked_slots=tuple(blocked_slots))

    def is_taken(self, candidate_date: Union[date, str], candidate_time: str) -> bool:
        return not is_slot_available(candidate_date, candidate_time, self)


def is_slot_available(
    candidate_date: Union[date, str, None],
    candidate_time: Optional[str],
    snapshot: AvailabilitySnapshot,
) -> bool:
    """
    Set-membership test of the candidate against booked and blocked slots.

    Raises:
        ValueError: If either candidate component is unset.
    """
    if candidate_date is None or candidate_time is None:
        raise ValueError("Candidate date and time must both be set")

    try:
        pair = (normalize_date(candidate_date), normalize_time(candidate_time))
    except ValueError:
        # Unparsable candidate never reads as open.
        logger.warning(
            "Candidate slot %r %r is malformed; treating as unavailable",
            candidate_date, candidate_time,
        )
        return False

    return pair not in snapshot.taken


def is_slot_bookable(
    candidate_date: Union[date, str],
    candidate_time: str,
    snapshot: AvailabilitySnapshot,
    today: date,
) -> bool:
    """Available, on a weekday, and today or later."""
    day = parse_date(candidate_date)
    if day < today or not is_weekday(day):
        return False
    return is_slot_available(day, candidate_time, snapshot)


def available_slots(
    candidate_date: Union[date, str],
    snapshot: AvailabilitySnapshot,
    today: date,
) -> list[str]:
    """Open grid times for a date, in order. Empty for weekends and past dates."""
    day = parse_date(candidate_date)
    if day < today or not is_weekday(day):
        return []
    return [label for label in slot_labels() if is_slot_available(day, label, snapshot)]
