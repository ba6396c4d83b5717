"""
Offline console demo: runs booking and moderation flows without any API keys.

Uses the real slot grid, availability checker, state machine, and
workflows against the in-memory store and auth provider. No Firestore,
no Firebase Auth, no email. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario blocked
    python console_demo.py --scenario race
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from booking_core.auth import AccessDeniedError, AdminSession, AuthError, InMemoryAuthProvider
from booking_core.catalog import get_all_services
from booking_core.config import AdminConfig, EmailConfig, settings
from booking_core.notifications import NotificationDispatcher
from booking_core.schemas import BookingRequest
from booking_core.store import InMemoryRecordStore
from booking_core.workflows import AdminModerationWorkflow, BookingOutcome, BookingWorkflow

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_ADMIN_EMAIL = "owner@example.com"
DEMO_ADMIN_PASSWORD = "demo-password"


def next_weekday(start: date, weekday: int = 0) -> date:
    """First date strictly after ``start`` falling on ``weekday`` (Monday=0)."""
    days = (weekday - start.weekday()) % 7 or 7
    return start + timedelta(days=days)


class ConsoleSession:
    """Drives the booking and moderation workflows from the terminal."""

    def __init__(self) -> None:
        self.store = InMemoryRecordStore()
        # Email left unconfigured: notifications are skipped and logged
        self.notifier = NotificationDispatcher(config=EmailConfig(service_id="", public_key=""))
        self.workflow = BookingWorkflow(self.store, self.notifier)
        self.auth = InMemoryAuthProvider()
        self.auth.add_user(DEMO_ADMIN_EMAIL, DEMO_ADMIN_PASSWORD)
        self.admin_session = AdminSession(self.auth, AdminConfig(email=DEMO_ADMIN_EMAIL))
        self.admin = AdminModerationWorkflow(self.store, self.admin_session)

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def show_outcome(self, outcome: BookingOutcome) -> None:
        if outcome["success"]:
            self.say(f"Appointment booked! {outcome['message']}")
        else:
            print(f"{RED}{outcome['message']}{RESET}")
            for field_name, error in outcome.get("errors", {}).items():
                print(f"{RED}  {field_name}: {error}{RESET}")
        self.system_log(f"State trace: {' -> '.join(self.workflow.state_machine.get_state_trace())}")

    async def show_slots(self, day: date) -> None:
        times = await self.workflow.available_times(day)
        self.system_log(f"Open on {day}: {', '.join(times) if times else 'none'}")

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    async def scenario_booking(self) -> None:
        monday = next_weekday(date.today())
        await self.show_slots(monday)
        outcome = await self.workflow.submit(BookingRequest(
            service="web-design", name="Jane Doe", email="jane@example.com",
            date=monday, time="09:00 AM",
        ))
        self.show_outcome(outcome)
        await self.show_slots(monday)

        print(f"\n{BLUE}[Visitor]{RESET} same slot again, with a typo in the email")
        self.show_outcome(await self.workflow.submit(BookingRequest(
            service="web-design", name="John Roe", email="foo",
            date=monday, time="9:00 AM",
        )))

    async def scenario_blocked(self) -> None:
        monday = next_weekday(date.today())
        with self.admin_session:
            await self.admin_session.sign_in(DEMO_ADMIN_EMAIL, DEMO_ADMIN_PASSWORD)
            result = await self.admin.add_blocked_slot(monday, "10:00 AM")
            self.system_log(result["message"])

            for slot in ("10:00 AM", "10:30 AM"):
                print(f"\n{BLUE}[Visitor]{RESET} booking {monday} {slot}")
                self.show_outcome(await self.workflow.submit(BookingRequest(
                    service="seo-consulting", name="Sam Lee", email="sam@example.com",
                    date=monday, time=slot,
                )))
            await self.show_slots(monday)

    async def scenario_admin(self) -> None:
        monday = next_weekday(date.today())
        for slot, name in (("11:00 AM", "Ava"), ("09:30 AM", "Ben")):
            await self.workflow.submit(BookingRequest(
                service="custom-software", name=name, email=f"{name.lower()}@example.com",
                date=monday, time=slot,
            ))

        with self.admin_session:
            try:
                await self.admin.list_bookings()
            except AccessDeniedError as exc:
                print(f"{YELLOW}Before sign-in: {exc}{RESET}")
            try:
                await self.admin_session.sign_in(DEMO_ADMIN_EMAIL, "wrong")
            except AuthError as exc:
                print(f"{YELLOW}Login failed: {exc}{RESET}")

            await self.admin_session.sign_in(DEMO_ADMIN_EMAIL, DEMO_ADMIN_PASSWORD)
            bookings = await self.admin.list_bookings()
            for booking in bookings:
                self.system_log(f"{booking.date} {booking.time} {booking.name} ({booking.service})")
            result = await self.admin.delete_booking(bookings[0].id)
            self.system_log(result["message"])
            self.system_log(f"Remaining: {len(await self.admin.list_bookings())}")
            await self.admin_session.sign_out()

    async def scenario_race(self) -> None:
        monday = next_weekday(date.today())
        racing = InMemoryRecordStore(latency_sec=0.01)
        request = BookingRequest(
            service="web-design", name="Racer", email="racer@example.com",
            date=monday, time="02:00 PM",
        )
        for unique in (False, True):
            racing.reset()
            first = BookingWorkflow(racing, self.notifier, enforce_unique_slots=unique)
            second = BookingWorkflow(racing, self.notifier, enforce_unique_slots=unique)
            outcomes = await asyncio.gather(first.submit(request), second.submit(request))
            wins = sum(1 for o in outcomes if o["success"])
            label = "unique slots" if unique else "no uniqueness constraint"
            self.system_log(f"{label}: {wins} of 2 concurrent submissions succeeded")

    SCENARIOS = {
        "booking": scenario_booking,
        "blocked": scenario_blocked,
        "admin": scenario_admin,
        "race": scenario_race,
    }

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        handler = self.SCENARIOS.get(scenario)
        if handler is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  APPOINTMENT BOOKING - Scenario: {scenario}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()
        asyncio.run(handler(self))
        print(f"\n{BOLD}  Scenario '{scenario}' complete.{RESET}")

    # ------------------------------------------------------------------ #
    # Interactive mode
    # ------------------------------------------------------------------ #

    def _ask(self, label: str) -> Optional[str]:
        value = input(f"{BLUE}{label}: {RESET}").strip()
        if value.lower() in ("quit", "exit", "q"):
            return None
        return value

    async def _interactive(self) -> None:
        services = ", ".join(s["id"] for s in get_all_services())
        while True:
            service = self._ask(f"Service ({services})")
            if service is None:
                return
            name = self._ask("Full name")
            email = self._ask("Email")
            phone = self._ask("Phone (optional)")
            day = self._ask("Date (YYYY-MM-DD)")
            if None in (name, email, phone, day):
                return
            try:
                chosen = date.fromisoformat(day) if day else None
            except ValueError:
                chosen = None
            if chosen is not None:
                await self.show_slots(chosen)
            time = self._ask("Time (e.g. 09:30 AM)")
            if time is None:
                return
            self.workflow.update_form(
                service=service, name=name, email=email, phone=phone,
                date=chosen, time=time or None,
            )
            self.show_outcome(await self.workflow.submit())
            print()

    def run(self) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  APPOINTMENT BOOKING - Console Demo{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}  Type 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()
        asyncio.run(self._interactive())
        print(f"\n{DIM}Session ended.{RESET}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args(argv)

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
