"""
Command-line entry point.

Lists open slots from the live Firestore project, or runs the offline
console demo.

Usage:
    Open slots:   python main.py slots 2026-10-26
    Console mode: python main.py console [--scenario booking]
"""

import asyncio
import logging
import sys
from datetime import date
from typing import Optional

from booking_core.config import settings
from booking_core.utils import parse_date

logger = logging.getLogger(__name__)


def _build_workflow():
    """Booking workflow over Firestore with EmailJS notifications."""
    from booking_core.notifications import NotificationDispatcher
    from booking_core.store.firestore import FirestoreRecordStore
    from booking_core.workflows import BookingWorkflow

    return BookingWorkflow(FirestoreRecordStore(), NotificationDispatcher())


async def _print_open_slots(day: date) -> None:
    workflow = _build_workflow()
    times = await workflow.available_times(day)
    logger.info("%d open slots on %s for '%s'", len(times), day, settings.business.name)
    for label in times:
        print(label)


def _run_console_mode(argv: list[str]) -> None:
    """Start the offline console demo (no API keys required)."""
    from console_demo import main as console_main

    console_main(argv)


def main(argv: Optional[list[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 1 and argv[0] == "slots":
        try:
            day = parse_date(argv[1])
        except ValueError:
            print(f"Invalid date {argv[1]!r}: expected YYYY-MM-DD")
            print(__doc__)
            return 2
        asyncio.run(_print_open_slots(day))
        return 0
    if argv and argv[0] == "console":
        _run_console_mode(argv[1:])
        return 0
    print(__doc__)
    return 1


if __name__ == "__main__":
    sys.exit(main())
