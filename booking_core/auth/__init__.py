from booking_core.auth.memory import InMemoryAuthProvider
from booking_core.auth.provider import AccessDeniedError, AuthError, AuthProvider
from booking_core.auth.session import AdminSession, is_admin_identity

__all__ = [
    "AccessDeniedError",
    "AdminSession",
    "AuthError",
    "AuthProvider",
    "InMemoryAuthProvider",
    "is_admin_identity",
]
