"""Shared test fixtures and helpers."""

import asyncio
from datetime import date, datetime, timezone
from typing import Any, Optional

import pytest

from booking_core.auth import AdminSession, InMemoryAuthProvider
from booking_core.config import AdminConfig, BusinessConfig, EmailConfig
from booking_core.notifications import NotificationDispatcher, NotificationError
from booking_core.schemas import BOOKINGS_COLLECTION, Booking, BookingRequest
from booking_core.store import InMemoryRecordStore
from booking_core.workflows import AdminModerationWorkflow, BookingWorkflow

# A Monday
TODAY = date(2026, 10, 19)
NEXT_MONDAY = date(2026, 10, 26)
SATURDAY = date(2026, 10, 24)
LAST_MONDAY = date(2026, 10, 12)

ADMIN_EMAIL = "owner@example.com"
ADMIN_PASSWORD = "s3cret-pass"
VISITOR_EMAIL = "visitor@example.com"
VISITOR_PASSWORD = "visitor-pass"

EMAIL_CONFIG = EmailConfig(
    service_id="service_test",
    owner_template_id="template_owner",
    customer_template_id="template_customer",
    contact_template_id="template_contact",
    public_key="public_test",
    private_key="",
    http_timeout_sec=5.0,
)
BUSINESS_CONFIG = BusinessConfig(name="Test Studio", owner_email="owner@example.com")


class RecordingEmailClient:
    """Stands in for EmailJSClient; records sends or fails on demand."""

    def __init__(self, fail: bool = False, gate: Optional[asyncio.Event] = None) -> None:
        self.fail = fail
        self.gate = gate
        self.sent: list[dict[str, Any]] = []

    async def send(
        self, service_id: str, template_id: str, template_params: dict, public_key: str
    ) -> str:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise NotificationError("provider unavailable")
        self.sent.append({
            "service_id": service_id,
            "template_id": template_id,
            "template_params": template_params,
            "public_key": public_key,
        })
        return "OK"


def make_request(**overrides: Any) -> BookingRequest:
    """Helper to create a valid BookingRequest with sensible defaults."""
    fields: dict[str, Any] = {
        "service": "web-design",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "",
        "date": NEXT_MONDAY,
        "time": "09:00 AM",
        "notes": "",
    }
    fields.update(overrides)
    return BookingRequest(**fields)


def make_booking(day: date = NEXT_MONDAY, time: str = "09:00 AM", name: str = "Jane Doe") -> Booking:
    return Booking(
        service="web-design",
        name=name,
        email="jane@example.com",
        date=day,
        time=time,
        created_at=datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
    )


async def insert_booking(store: InMemoryRecordStore, **kwargs: Any) -> str:
    return await store.insert(BOOKINGS_COLLECTION, make_booking(**kwargs).to_record())


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def email_client():
    return RecordingEmailClient()


@pytest.fixture
def notifier(email_client):
    return NotificationDispatcher(client=email_client, config=EMAIL_CONFIG, business=BUSINESS_CONFIG)


@pytest.fixture
def workflow(store, notifier):
    return BookingWorkflow(store, notifier, today=lambda: TODAY, enforce_unique_slots=False)


@pytest.fixture
def auth_provider():
    provider = InMemoryAuthProvider()
    provider.add_user(ADMIN_EMAIL, ADMIN_PASSWORD, uid="admin-uid")
    provider.add_user(VISITOR_EMAIL, VISITOR_PASSWORD, uid="visitor-uid")
    return provider


@pytest.fixture
def admin_session(auth_provider):
    session = AdminSession(auth_provider, AdminConfig(email=ADMIN_EMAIL, uid=""))
    session.start()
    yield session
    session.close()


@pytest.fixture
def admin(store, admin_session):
    return AdminModerationWorkflow(store, admin_session)
