"""In-process auth provider with a fixed credential table (demo and tests)."""

import hashlib
import logging

from booking_core.auth.provider import AuthError, AuthProvider
from booking_core.schemas.session_schema import AuthUser

logger = logging.getLogger(__name__)


class InMemoryAuthProvider(AuthProvider):
    """Accepts only the accounts registered with ``add_user``."""

    def __init__(self) -> None:
        super().__init__()
        self._accounts: dict[str, tuple[str, str]] = {}

    def add_user(self, email: str, password: str, uid: str = "") -> AuthUser:
        email = email.strip().lower()
        uid = uid or hashlib.sha256(email.encode()).hexdigest()[:28]
        self._accounts[email] = (uid, password)
        return AuthUser(uid=uid, email=email)

    async def _authenticate(self, email: str, password: str) -> AuthUser:
        account = self._accounts.get(email.lower())
        if account is None or account[1] != password:
            raise AuthError("Incorrect email or password.")
        return AuthUser(uid=account[0], email=email.lower())
