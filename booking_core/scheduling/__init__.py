from booking_core.scheduling.availability import (
    AvailabilitySnapshot,
    available_slots,
    is_slot_available,
    is_slot_bookable,
)
from booking_core.scheduling.slot_generator import (
    generate_time_slots,
    is_weekday,
    normalize_time,
    slot_labels,
)
from booking_core.scheduling.state_machine import (
    BookingState,
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
)
from booking_core.scheduling.validation import validate_booking_request

__all__ = [
    "AvailabilitySnapshot",
    "available_slots",
    "is_slot_available",
    "is_slot_bookable",
    "generate_time_slots",
    "is_weekday",
    "normalize_time",
    "slot_labels",
    "BookingState",
    "BookingStateMachine",
    "BookingTrigger",
    "InvalidTransitionError",
    "validate_booking_request",
]
