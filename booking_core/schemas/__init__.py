from booking_core.schemas.booking_schema import (
    BLOCKED_TIMES_COLLECTION,
    BOOKINGS_COLLECTION,
    BlockedSlot,
    Booking,
    BookingRequest,
    DecodeError,
    decode_blocked_slot,
    decode_booking,
    slot_key,
)
from booking_core.schemas.session_schema import AuthUser

__all__ = [
    "BLOCKED_TIMES_COLLECTION",
    "BOOKINGS_COLLECTION",
    "AuthUser",
    "BlockedSlot",
    "Booking",
    "BookingRequest",
    "DecodeError",
    "decode_blocked_slot",
    "decode_booking",
    "slot_key",
]
