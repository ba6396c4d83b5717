"""
Booking notification dispatch.

Policy: after a booking is persisted, an operator notice and a customer
confirmation are sent as independent background tasks. The caller never
awaits them. A failed send is logged and dropped: it is not retried and
never affects the booking. Contact-form messages are different; the
message is the deliverable, so that send is awaited and errors propagate.
"""

import asyncio
import logging
from typing import Any, Optional

from booking_core.catalog import get_service_name
from booking_core.config import BusinessConfig, EmailConfig, settings
from booking_core.notifications.emailjs import EmailJSClient, NotificationError
from booking_core.schemas.booking_schema import Booking

logger = logging.getLogger(__name__)

DISPLAY_DATE_FORMAT = "%B %d, %Y"


class NotificationDispatcher:
    """Fire-and-forget sender for booking emails."""

    def __init__(
        self,
        client: Optional[EmailJSClient] = None,
        config: Optional[EmailConfig] = None,
        business: Optional[BusinessConfig] = None,
    ) -> None:
        self._config = config or settings.email
        self._business = business or settings.business
        self._client = client or EmailJSClient(self._config)
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def booking_params(self, booking: Booking) -> dict[str, Any]:
        return {
            "service": get_service_name(booking.service) or booking.service,
            "name": booking.name,
            "email": booking.email,
            "phone": booking.phone,
            "date": booking.date.strftime(DISPLAY_DATE_FORMAT),
            "time": booking.time,
            "notes": booking.notes,
            "business_name": self._business.name,
        }

    def dispatch_booking_notifications(self, booking: Booking) -> list[asyncio.Task]:
        """Start the operator and customer sends without awaiting them.

        Must be called from a running event loop.
        """
        if not self._config.configured:
            logger.info("Email not configured; skipping notifications for %s", booking.id)
            return []

        params = self.booking_params(booking)
        sends = [
            ("operator", self._config.owner_template_id,
             {**params, "to_email": self._business.owner_email}),
            ("customer", self._config.customer_template_id,
             {**params, "to_name": booking.name, "to_email": booking.email}),
        ]

        tasks = []
        for kind, template_id, template_params in sends:
            if not template_id:
                logger.info("No %s template configured; skipping", kind)
                continue
            task = asyncio.create_task(self._send_safely(kind, template_id, template_params))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            tasks.append(task)
        return tasks

    async def _send_safely(self, kind: str, template_id: str, params: dict[str, Any]) -> bool:
        try:
            await self._client.send(
                self._config.service_id, template_id, params, self._config.public_key
            )
        except NotificationError as exc:
            logger.error("Failed to send %s notification: %s", kind, exc)
            return False
        except Exception:
            # Background task: nothing awaits it to see the error
            logger.exception("Failed to send %s notification", kind)
            return False
        logger.info("Sent %s notification to %s", kind, params.get("to_email") or "operator")
        return True

    async def send_contact_message(self, name: str, email: str, message: str) -> None:
        """
        Send a contact-form message to the operator.

        Raises:
            NotificationError: If email is not configured or the send fails.
        """
        if not self._config.configured or not self._config.contact_template_id:
            raise NotificationError("Contact email is not configured")
        await self._client.send(
            self._config.service_id,
            self._config.contact_template_id,
            {"from_name": name, "from_email": email, "message": message},
            self._config.public_key,
        )

    async def drain(self) -> None:
        """Wait for in-flight sends (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
