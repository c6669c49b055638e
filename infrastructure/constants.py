"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for the facility and API constants
SCOPE: Resource definitions, booking payload identifiers, storage keys
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

# Appointlet organisation of the Ajuntament d'Estivella
APPOINTLET_API_URL = "https://api.appointlet.com"
# Origin of the organisation's public booking page
APPOINTLET_ORIGIN = "https://ajuntament-destivella.appointlet.com"
ORGANIZATION_ID = 130103
FACILITY_TIMEZONE = "Europe/Madrid"

# The facility publishes slots at most two days ahead
BOOKING_WINDOW_DAYS = 2

# Default values used by the scheduling form
DEFAULT_DESIRED_TIME = "06:00"
DEFAULT_FIRE_TIME = "00:00"

HTTP_TIMEOUT_SECONDS = 30.0

DEFAULT_HEADERS = {
    "accept": "application/json, text/plain, */*",
    "accept-language": "es,es-ES;q=0.9,en;q=0.8",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/139.0.0.0 Safari/537.36"
    ),
}

# Appointlet form field names for the profile values
PROFILE_FIELD_NAMES = {
    "given_name": "nom",
    "family_name": "last-name",
    "locality": "localitat",
    "phone": "telefon",
}

STORE_KEYS = {
    "settings": "app_settings",
    "bookings": "app_bookings",
    "jobs": "app_scheduled_jobs",
}


class Resource(Enum):
    """Bookable sports surfaces."""

    PADEL = "padel"
    FRONTENIS = "frontenis"

    @property
    def config(self) -> "ResourceConfig":
        return RESOURCE_CONFIG[self]

    @classmethod
    def parse(cls, value: "Resource | str") -> "Resource":
        """Return the resource for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown resource: {value!r}") from None


@dataclass(frozen=True)
class ResourceConfig:
    """Static Appointlet identifiers for a resource."""

    bookable_id: int
    service_id: int
    duration_minutes: int
    label: str

    def availability_url(self, base_url: str = APPOINTLET_API_URL) -> str:
        return (
            f"{base_url.rstrip('/')}/bookables/{self.bookable_id}"
            f"/available_times?service={self.service_id}"
        )


RESOURCE_CONFIG: Dict[Resource, ResourceConfig] = {
    Resource.PADEL: ResourceConfig(
        bookable_id=194780,
        service_id=570818,
        duration_minutes=90,
        label="Pádel",
    ),
    Resource.FRONTENIS: ResourceConfig(
        bookable_id=195640,
        service_id=570852,
        duration_minutes=60,
        label="Frontenis",
    ),
}
