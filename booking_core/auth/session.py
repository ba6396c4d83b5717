"""
Explicit admin session context.

Replaces ambient "is the admin logged in" state: the session subscribes
to the provider's auth stream on ``start()``, disposes of the
subscription on ``close()``, and is passed to the moderation workflow,
which asks it to authorize every operation.
"""

import logging
from typing import Optional

from booking_core.auth.provider import AccessDeniedError, AuthProvider, Unsubscribe
from booking_core.config import AdminConfig, settings
from booking_core.schemas.session_schema import AuthUser

logger = logging.getLogger(__name__)


def is_admin_identity(user: Optional[AuthUser], admin: AdminConfig) -> bool:
    """Email (case-insensitive) or uid must match the configured admin."""
    if user is None:
        return False
    if admin.email and user.email.lower() == admin.email.strip().lower():
        return True
    return bool(admin.uid) and user.uid == admin.uid


class AdminSession:
    """Tracks the signed-in identity and gates admin-only operations."""

    def __init__(self, provider: AuthProvider, admin: Optional[AdminConfig] = None) -> None:
        self._provider = provider
        self._admin = admin or settings.admin
        self._user: Optional[AuthUser] = None
        self._unsubscribe: Optional[Unsubscribe] = None

    def start(self) -> "AdminSession":
        if self._unsubscribe is None:
            self._unsubscribe = self._provider.observe_auth_state(self._on_auth_change)
        return self

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._user = None

    def __enter__(self) -> "AdminSession":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    @property
    def is_admin(self) -> bool:
        return is_admin_identity(self._user, self._admin)

    def _on_auth_change(self, user: Optional[AuthUser]) -> None:
        self._user = user
        logger.debug("Auth state changed: %s", user.email if user else "signed out")

    def require_admin(self) -> AuthUser:
        """
        Return the admin identity or refuse.

        Raises:
            AccessDeniedError: If the session is closed, nobody is signed
                in, or the identity is not the configured admin.
        """
        if not self.active:
            raise AccessDeniedError("Admin session is not active.")
        if self._user is None:
            raise AccessDeniedError("Please sign in to manage bookings.")
        if not self.is_admin:
            raise AccessDeniedError("This account is not authorized to manage bookings.")
        return self._user

    async def sign_in(self, email: str, password: str) -> AuthUser:
        """
        Sign in through the provider and insist on the admin identity.

        A non-admin account is signed straight back out.

        Raises:
            AuthError: Bad credentials.
            AccessDeniedError: Valid credentials for a non-admin account.
        """
        user = await self._provider.sign_in(email, password)
        if not is_admin_identity(user, self._admin):
            await self._provider.sign_out()
            logger.warning("Rejected non-admin sign-in for %s", user.email)
            raise AccessDeniedError("This account is not authorized to manage bookings.")
        return user

    async def sign_out(self) -> None:
        await self._provider.sign_out()
