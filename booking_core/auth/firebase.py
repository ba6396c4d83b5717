"""
Firebase Authentication over the Identity Toolkit REST API.

The Admin SDK cannot verify a password, so sign-in posts the credentials
to ``accounts:signInWithPassword`` with the project's web API key, the
same call the browser SDK makes.
"""

import logging
from typing import Optional

import httpx

from booking_core.auth.provider import AuthError, AuthProvider
from booking_core.config import settings
from booking_core.schemas.session_schema import AuthUser

logger = logging.getLogger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

# Identity Toolkit error codes -> user-facing messages
_ERROR_MESSAGES: dict[str, str] = {
    "INVALID_LOGIN_CREDENTIALS": "Incorrect email or password.",
    "INVALID_PASSWORD": "Incorrect email or password.",
    "EMAIL_NOT_FOUND": "Incorrect email or password.",
    "INVALID_EMAIL": "Enter a valid email.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
}


class FirebaseAuthProvider(AuthProvider):
    """Email/password sign-in against Firebase Auth."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_sec: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__()
        self._api_key = settings.firebase.api_key if api_key is None else api_key
        self._timeout_sec = settings.email.http_timeout_sec if timeout_sec is None else timeout_sec
        self._transport = transport

    async def _authenticate(self, email: str, password: str) -> AuthUser:
        if not self._api_key:
            raise AuthError("Sign-in is not configured.")

        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_sec, transport=self._transport
            ) as client:
                response = await client.post(SIGN_IN_URL, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Firebase sign-in request failed: %s", exc)
            raise AuthError("Could not reach the sign-in service. Please try again.") from exc

        if response.status_code != 200:
            code = _error_code(response)
            logger.warning("Firebase sign-in rejected for %s: %s", email, code)
            raise AuthError(_ERROR_MESSAGES.get(code, "Sign-in failed."))

        data = response.json()
        return AuthUser(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )


def _error_code(response: httpx.Response) -> str:
    """Extract e.g. "TOO_MANY_ATTEMPTS_TRY_LATER" from "TOO_MANY_ATTEMPTS_TRY_LATER : detail"."""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP_{response.status_code}"
    return str(message).split(" : ", 1)[0].strip()
