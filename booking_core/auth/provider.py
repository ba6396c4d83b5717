"""
Authentication provider interface.

Providers own the signed-in identity and notify observers on every
change. Observers are called immediately with the current identity when
they subscribe, then again after each sign-in and sign-out.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from booking_core.schemas.session_schema import AuthUser

logger = logging.getLogger(__name__)

AuthCallback = Callable[[Optional[AuthUser]], None]
Unsubscribe = Callable[[], None]


class AuthError(Exception):
    """Bad credentials or an unusable identity."""


class AccessDeniedError(AuthError):
    """The caller is not the configured admin identity."""


class AuthProvider(ABC):
    """Sign-in, sign-out, and an observable auth state."""

    def __init__(self) -> None:
        self._current_user: Optional[AuthUser] = None
        self._observers: list[AuthCallback] = []

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._current_user

    @abstractmethod
    async def _authenticate(self, email: str, password: str) -> AuthUser:
        """Verify credentials with the backing service."""

    async def sign_in(self, email: str, password: str) -> AuthUser:
        """
        Authenticate and make the identity current.

        Raises:
            AuthError: If credentials are missing or rejected.
        """
        email = email.strip()
        if not email or not password:
            raise AuthError("Email and password are required.")
        user = await self._authenticate(email, password)
        logger.info("Signed in as %s", user.email)
        self._set_user(user)
        return user

    async def sign_out(self) -> None:
        if self._current_user is not None:
            logger.info("Signed out %s", self._current_user.email)
        self._set_user(None)

    def observe_auth_state(self, callback: AuthCallback) -> Unsubscribe:
        """Subscribe to identity changes; returns a handle that unsubscribes."""
        self._observers.append(callback)
        callback(self._current_user)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _set_user(self, user: Optional[AuthUser]) -> None:
        self._current_user = user
        for callback in list(self._observers):
            callback(user)
