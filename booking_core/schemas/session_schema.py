"""Signed-in identity data."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthUser:
    """
    Identity reported by the authentication provider.

    ``id_token`` and ``refresh_token`` are only present for providers that
    issue them (Firebase); the in-memory provider leaves them empty.
    """
    uid: str
    email: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
