"""Booking, blocked-slot, and booking-form data models.

Records read back from the store go through ``decode_booking`` /
``decode_blocked_slot`` so missing or malformed fields surface as a
``DecodeError`` at the boundary instead of at the point of use.
"""

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from booking_core.scheduling.slot_generator import normalize_time
from booking_core.utils import normalize_date

BOOKINGS_COLLECTION = "bookings"
BLOCKED_TIMES_COLLECTION = "blocked_times"


class DecodeError(ValueError):
    """Raised when a stored record is missing or has malformed required fields."""

    def __init__(self, kind: str, record_id: Optional[str], detail: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"Cannot decode {kind} record {record_id!r}: {detail}")


def slot_key(date: dt.date, time: str) -> str:
    """Deterministic identity of a slot, usable as a document key.

    Example: ``slot_key(date(2026, 10, 19), "09:00 AM") == "2026-10-19_0900AM"``
    """
    return f"{normalize_date(date)}_{normalize_time(time).replace(':', '').replace(' ', '')}"


class BookingRequest(BaseModel):
    """Booking form data as entered; validated by the booking workflow."""

    service: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    date: Optional[dt.date] = None
    time: Optional[str] = None
    notes: str = ""


class _SlotRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    date: dt.date
    time: str

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, value: str) -> str:
        return normalize_time(value)

    @property
    def slot_key(self) -> str:
        return slot_key(self.date, self.time)


class Booking(_SlotRecord):
    """A confirmed appointment occupying exactly one slot."""

    service: str
    name: str
    email: str
    phone: str = ""
    notes: str = ""
    created_at: dt.datetime = Field(alias="createdAt")

    def to_record(self) -> dict[str, Any]:
        """Store shape: camelCase ``createdAt``, ISO date, 12-hour time."""
        return {
            "service": self.service,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "date": normalize_date(self.date),
            "time": self.time,
            "notes": self.notes,
            "createdAt": self.created_at,
        }


class BlockedSlot(_SlotRecord):
    """An operator-closed slot, independent of any booking."""

    def to_record(self) -> dict[str, Any]:
        return {"date": normalize_date(self.date), "time": self.time}


def _decode(model: type, kind: str, record: dict[str, Any]) -> Any:
    try:
        return model.model_validate(record)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise DecodeError(kind, record.get("id"), f"invalid fields: {fields}") from exc


def decode_booking(record: dict[str, Any]) -> Booking:
    return _decode(Booking, "booking", record)


def decode_blocked_slot(record: dict[str, Any]) -> BlockedSlot:
    return _decode(BlockedSlot, "blocked slot", record)
