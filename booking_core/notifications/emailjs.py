"""
EmailJS transactional email client.

Mirrors the browser SDK's ``emailjs.send(serviceId, templateId, params,
publicKey)`` over the REST endpoint. No retries and no delivery
guarantee: a send either returns or raises NotificationError.
"""

import logging
from typing import Any, Optional

import httpx

from booking_core.config import EmailConfig, settings

logger = logging.getLogger(__name__)

SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class NotificationError(Exception):
    """The email provider rejected the send or could not be reached."""


class EmailJSClient:
    """Thin async wrapper over the EmailJS send endpoint."""

    def __init__(
        self,
        config: Optional[EmailConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or settings.email
        self._transport = transport

    async def send(
        self,
        service_id: str,
        template_id: str,
        template_params: dict[str, Any],
        public_key: str,
    ) -> str:
        """Send one templated email; returns the provider's response text."""
        payload: dict[str, Any] = {
            "service_id": service_id,
            "template_id": template_id,
            "user_id": public_key,
            "template_params": template_params,
        }
        if self._config.private_key:
            payload["accessToken"] = self._config.private_key

        try:
            async with httpx.AsyncClient(
                timeout=self._config.http_timeout_sec, transport=self._transport
            ) as client:
                response = await client.post(SEND_URL, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"EmailJS request failed: {exc}") from exc

        if response.status_code != 200:
            raise NotificationError(
                f"EmailJS rejected template {template_id!r}: "
                f"HTTP {response.status_code} {response.text.strip()}"
            )
        logger.debug("EmailJS accepted template %s", template_id)
        return response.text
