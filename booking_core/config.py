"""
Centralized configuration with environment variable overrides.

Business identity, the slot grid, backend credentials, and email
templates are configurable here. Nothing is hardcoded in workflow logic.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, TextIO

from dotenv import load_dotenv

from booking_core.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag ("true"/"false", "1"/"0", "yes"/"no")."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("true", "1", "yes"):
        return True
    if raw in ("false", "0", "no", ""):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Mawmaw's Web Studio")
    owner_email: str = os.getenv("OWNER_EMAIL", "")


@dataclass(frozen=True)
class ScheduleConfig:
    """Daily slot grid: [start_hour, end_hour) in fixed-minute steps."""

    start_hour: int = _safe_int("SLOT_START_HOUR", "9")
    end_hour: int = _safe_int("SLOT_END_HOUR", "17")
    interval_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")


@dataclass(frozen=True)
class BookingConfig:
    """Booking write policy."""

    enforce_unique_slots: bool = _safe_bool("ENFORCE_UNIQUE_SLOTS", "false")


@dataclass(frozen=True)
class FirebaseConfig:
    """Managed backend settings (Firestore + Firebase Auth)."""

    project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    api_key: str = os.getenv("FIREBASE_API_KEY", "")
    credentials_path: str = os.getenv("FIREBASE_CREDENTIALS_PATH", "")


@dataclass(frozen=True)
class AdminConfig:
    """The single account allowed to moderate bookings."""

    email: str = os.getenv("ADMIN_EMAIL", "")
    uid: str = os.getenv("ADMIN_UID", "")


@dataclass(frozen=True)
class EmailConfig:
    """EmailJS service and template identifiers."""

    service_id: str = os.getenv("EMAILJS_SERVICE_ID", "")
    owner_template_id: str = os.getenv("EMAILJS_OWNER_TEMPLATE_ID", "")
    customer_template_id: str = os.getenv("EMAILJS_CUSTOMER_TEMPLATE_ID", "")
    contact_template_id: str = os.getenv("EMAILJS_CONTACT_TEMPLATE_ID", "")
    public_key: str = os.getenv("EMAILJS_PUBLIC_KEY", "")
    private_key: str = os.getenv("EMAILJS_PRIVATE_KEY", "")
    http_timeout_sec: float = _safe_float("HTTP_TIMEOUT_SECONDS", "10.0")

    @property
    def configured(self) -> bool:
        return bool(self.service_id and self.public_key)


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    firebase: FirebaseConfig = field(default_factory=FirebaseConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    schedule = config.schedule
    if not 0 <= schedule.start_hour < schedule.end_hour <= 24:
        raise ValueError(
            "SLOT_START_HOUR and SLOT_END_HOUR must satisfy 0 <= start < end <= 24, "
            f"got {schedule.start_hour} and {schedule.end_hour}"
        )
    if schedule.interval_minutes < 1:
        raise ValueError(
            f"SLOT_INTERVAL_MINUTES must be >= 1, got {schedule.interval_minutes}"
        )
    if config.email.http_timeout_sec <= 0:
        raise ValueError(
            f"HTTP_TIMEOUT_SECONDS must be > 0, got {config.email.http_timeout_sec}"
        )
    if not config.admin.email and not config.admin.uid:
        logger.warning("No ADMIN_EMAIL or ADMIN_UID set; admin moderation is disabled")


LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def build_log_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler whose records always carry a request_id."""
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
