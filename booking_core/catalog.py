"""Service catalog: the fixed set of offered services."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

SERVICE_CATALOG: dict[str, dict] = {
    "web-design": {
        "name": "Web Design",
        "description": "Design and build of a small business website.",
    },
    "seo-consulting": {
        "name": "Consulting",
        "description": "Search visibility review and a practical improvement plan.",
    },
    "custom-software": {
        "name": "Mawmaw's Biscuit Service",
        "description": "Bespoke software work, scoped during the appointment.",
    },
}


def get_valid_service_ids() -> list[str]:
    """Return all recognized service IDs.

    This is the single source of truth for service validation across the
    booking validator and any presentation layer that lists services.
    """
    return list(SERVICE_CATALOG.keys())


def get_all_services() -> list[dict]:
    """Return all services with basic info."""
    return [
        {"id": sid, "name": info["name"]}
        for sid, info in SERVICE_CATALOG.items()
    ]


def get_service_name(service_id: str) -> Optional[str]:
    """Display name for a service ID, or None when unknown."""
    info = SERVICE_CATALOG.get(service_id)
    return info["name"] if info else None


def is_known_service(service_id: Optional[str]) -> bool:
    return bool(service_id) and service_id in SERVICE_CATALOG
