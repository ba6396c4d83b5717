"""
Daily slot grid and weekday rules.

The grid is date-independent: every business day offers the same ordered
sequence of time-of-day values, from the configured start hour (inclusive)
to the end hour (exclusive) in fixed steps. With the defaults that is
09:00 AM, 09:30 AM, ..., 04:30 PM.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from booking_core.config import settings
from booking_core.utils import parse_date

# Canonical stored form: zero-padded 12-hour clock, e.g. "09:30 AM"
TIME_FORMAT = "%I:%M %p"

_GRID_ANCHOR = datetime(2000, 1, 3)


def generate_time_slots(
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
    interval_minutes: Optional[int] = None,
) -> list[time]:
    """Return the ordered time-of-day grid for a business day."""
    schedule = settings.schedule
    start_hour = schedule.start_hour if start_hour is None else start_hour
    end_hour = schedule.end_hour if end_hour is None else end_hour
    step = timedelta(minutes=schedule.interval_minutes if interval_minutes is None else interval_minutes)

    current = _GRID_ANCHOR + timedelta(hours=start_hour)
    end = _GRID_ANCHOR + timedelta(hours=end_hour)
    times: list[time] = []
    while current < end:
        times.append(current.time())
        current += step
    return times


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def slot_labels() -> list[str]:
    """The grid formatted as canonical 12-hour strings."""
    return [format_time(t) for t in generate_time_slots()]


def parse_time(value: Union[time, str]) -> time:
    """Parse a 12-hour clock string such as "9:00 am" or "09:00 AM".

    Raises:
        ValueError: If the value does not match ``hh:mm AM/PM``.
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a time string, got {type(value).__name__}")
    cleaned = " ".join(value.split()).upper()
    return datetime.strptime(cleaned, TIME_FORMAT).time()


def normalize_time(value: Union[time, str]) -> str:
    """Canonical "hh:mm AM" form, so "9:00 AM" and "09:00 AM" compare equal."""
    return format_time(parse_time(value))


def is_on_grid(value: Union[time, str]) -> bool:
    """True when the value parses and is one of the generated slot times."""
    try:
        return parse_time(value) in generate_time_slots()
    except ValueError:
        return False


def is_weekday(value: Union[date, str]) -> bool:
    """Monday through Friday qualify for booking; Saturday and Sunday do not."""
    return parse_date(value).weekday() < 5
