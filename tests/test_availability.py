"""Tests for the availability checker."""

import logging
from datetime import date

import pytest

from booking_core.scheduling.availability import (
    AvailabilitySnapshot,
    available_slots,
    is_slot_available,
    is_slot_bookable,
)
from booking_core.scheduling.slot_generator import slot_labels
from booking_core.schemas import BlockedSlot
from tests.conftest import LAST_MONDAY, NEXT_MONDAY, SATURDAY, TODAY, make_booking


class _LooseRecord:
    """A record whose time was never normalized (e.g. written by another client)."""

    def __init__(self, day, time):
        self.date = day
        self.time = time


@pytest.fixture
def snapshot():
    return AvailabilitySnapshot.from_records(
        bookings=[make_booking(NEXT_MONDAY, "09:00 AM")],
        blocked_slots=[BlockedSlot(date=NEXT_MONDAY, time="10:00 AM")],
    )


class TestIsSlotAvailable:
    def test_booked_pair_unavailable(self, snapshot):
        assert not is_slot_available(NEXT_MONDAY, "09:00 AM", snapshot)

    def test_blocked_pair_unavailable(self, snapshot):
        assert not is_slot_available(NEXT_MONDAY, "10:00 AM", snapshot)

    def test_free_pair_available(self, snapshot):
        assert is_slot_available(NEXT_MONDAY, "10:30 AM", snapshot)

    def test_same_time_other_day_available(self, snapshot):
        assert is_slot_available(date(2026, 10, 27), "09:00 AM", snapshot)

    def test_padding_differences_ignored(self, snapshot):
        assert not is_slot_available(NEXT_MONDAY, "9:00 AM", snapshot)
        assert not is_slot_available("2026-10-26", "10:00 am", snapshot)

    def test_every_taken_pair_unavailable_every_other_available(self, snapshot):
        for label in slot_labels():
            expected = label not in ("09:00 AM", "10:00 AM")
            assert is_slot_available(NEXT_MONDAY, label, snapshot) is expected

    def test_unset_candidate_raises(self, snapshot):
        with pytest.raises(ValueError):
            is_slot_available(None, "09:00 AM", snapshot)
        with pytest.raises(ValueError):
            is_slot_available(NEXT_MONDAY, None, snapshot)

    def test_malformed_candidate_reads_unavailable(self, snapshot):
        assert not is_slot_available(NEXT_MONDAY, "quarter past nine", snapshot)

    def test_malformed_stored_record_blocks_nothing(self, caplog):
        broken = AvailabilitySnapshot.from_records(
            blocked_slots=[_LooseRecord(NEXT_MONDAY, "whenever")],
        )
        with caplog.at_level(logging.WARNING):
            assert broken.taken == frozenset()
        assert all(is_slot_available(NEXT_MONDAY, label, broken) for label in slot_labels())
        assert "malformed slot" in caplog.text

    def test_unnormalized_stored_time_still_matches(self):
        loose = AvailabilitySnapshot.from_records(blocked_slots=[_LooseRecord("2026-10-26", "9:30 am")])
        assert not is_slot_available(NEXT_MONDAY, "09:30 AM", loose)

    def test_is_taken_mirrors_availability(self, snapshot):
        assert snapshot.is_taken(NEXT_MONDAY, "09:00 AM")
        assert not snapshot.is_taken(NEXT_MONDAY, "11:00 AM")


class TestBookable:
    def test_past_date_not_bookable(self):
        assert not is_slot_bookable(LAST_MONDAY, "09:00 AM", AvailabilitySnapshot(), TODAY)

    def test_weekend_not_bookable(self):
        assert not is_slot_bookable(SATURDAY, "09:00 AM", AvailabilitySnapshot(), TODAY)

    def test_today_bookable(self):
        assert is_slot_bookable(TODAY, "09:00 AM", AvailabilitySnapshot(), TODAY)


class TestAvailableSlots:
    def test_filters_taken(self, snapshot):
        open_times = available_slots(NEXT_MONDAY, snapshot, TODAY)
        assert len(open_times) == 14
        assert "09:00 AM" not in open_times
        assert "10:00 AM" not in open_times
        assert open_times[0] == "09:30 AM"

    def test_weekend_empty(self, snapshot):
        assert available_slots(SATURDAY, snapshot, TODAY) == []

    def test_past_empty(self, snapshot):
        assert available_slots(LAST_MONDAY, snapshot, TODAY) == []

    def test_empty_snapshot_full_grid(self):
        assert available_slots(NEXT_MONDAY, AvailabilitySnapshot(), TODAY) == slot_labels()
