"""Contact form: a visitor message delivered to the operator by email."""

import logging
from typing import TypedDict

from booking_core.notifications.dispatcher import NotificationDispatcher
from booking_core.notifications.emailjs import NotificationError
from booking_core.utils import is_valid_email

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


class ContactResult(TypedDict, total=False):
    success: bool
    message: str
    errors: dict[str, str]


class ContactWorkflow:
    def __init__(self, notifier: NotificationDispatcher) -> None:
        self._notifier = notifier

    async def send_message(self, name: str, email: str, message: str) -> ContactResult:
        errors: dict[str, str] = {}
        if not name.strip():
            errors["name"] = "Name is required."
        if not email.strip():
            errors["email"] = "Email is required."
        elif not is_valid_email(email):
            errors["email"] = "Enter a valid email."
        if not message.strip():
            errors["message"] = "Message is required."
        elif len(message) > MAX_MESSAGE_LENGTH:
            errors["message"] = f"Please keep your message under {MAX_MESSAGE_LENGTH} characters."
        if errors:
            return {"success": False, "message": "Please correct the highlighted fields.", "errors": errors}

        try:
            await self._notifier.send_contact_message(name.strip(), email.strip(), message.strip())
        except NotificationError as exc:
            logger.error("Contact message from %s not sent: %s", email, exc)
            return {
                "success": False,
                "message": "Your message could not be sent. Please try again later.",
                "errors": {},
            }
        logger.info("Contact message sent from %s", email)
        return {
            "success": True,
            "message": "Message sent! I'll get back to you as soon as possible.",
            "errors": {},
        }
