"""
Booking form validation.

Collects every violation at once and reports them as a field-name to
message mapping; an empty mapping means the request may be persisted.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from booking_core.catalog import is_known_service
from booking_core.scheduling.availability import AvailabilitySnapshot, is_slot_available
from booking_core.scheduling.slot_generator import is_on_grid, is_weekday
from booking_core.utils import is_digits_only, is_valid_email

if TYPE_CHECKING:
    from booking_core.schemas.booking_schema import BookingRequest

logger = logging.getLogger(__name__)

MSG_SERVICE_MISSING = "Please select a service."
MSG_SERVICE_UNKNOWN = "Please select one of the listed services."
MSG_NAME_MISSING = "Name is required."
MSG_EMAIL_MISSING = "Email is required."
MSG_EMAIL_INVALID = "Enter a valid email."
MSG_DATE_MISSING = "Please select a date."
MSG_DATE_PAST = "Please select today or a later date."
MSG_DATE_WEEKEND = "Appointments are available Monday to Friday only."
MSG_TIME_MISSING = "Please select a time."
MSG_TIME_OFF_GRID = "Please select one of the listed times."
MSG_TIME_TAKEN = "That time is no longer available. Please choose another."
MSG_PHONE_DIGITS = "Phone number should only contain digits."


class ValidationError(Exception):
    """Raised with the per-field errors of a rejected submission."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__(f"Invalid fields: {', '.join(sorted(self.errors))}")


def validate_booking_request(
    request: BookingRequest,
    snapshot: AvailabilitySnapshot,
    today: date,
) -> dict[str, str]:
    """Return field errors for a submission; empty when it may proceed."""
    errors: dict[str, str] = {}

    service = request.service.strip()
    if not service:
        errors["service"] = MSG_SERVICE_MISSING
    elif not is_known_service(service):
        errors["service"] = MSG_SERVICE_UNKNOWN

    if not request.name.strip():
        errors["name"] = MSG_NAME_MISSING

    email = request.email.strip()
    if not email:
        errors["email"] = MSG_EMAIL_MISSING
    elif not is_valid_email(email):
        errors["email"] = MSG_EMAIL_INVALID

    date_ok = False
    if request.date is None:
        errors["date"] = MSG_DATE_MISSING
    elif request.date < today:
        errors["date"] = MSG_DATE_PAST
    elif not is_weekday(request.date):
        errors["date"] = MSG_DATE_WEEKEND
    else:
        date_ok = True

    if not request.time:
        errors["time"] = MSG_TIME_MISSING
    elif not is_on_grid(request.time):
        errors["time"] = MSG_TIME_OFF_GRID
    elif date_ok and not is_slot_available(request.date, request.time, snapshot):
        errors["time"] = MSG_TIME_TAKEN

    phone = request.phone.strip()
    if phone and not is_digits_only(phone):
        errors["phone"] = MSG_PHONE_DIGITS

    if errors:
        logger.debug("Booking request rejected: %s", sorted(errors))
    return errors
