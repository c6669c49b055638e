"""Factories bridging executor inputs with shared booking contracts."""

from __future__ import annotations

from datetime import datetime, timedelta

from automation.availability.datetime_helpers import parse_instant
from automation.shared.booking_contracts import BookingRequest
from infrastructure.constants import FACILITY_TIMEZONE, ORGANIZATION_ID, Resource
from reservations.models import UserProfile


def build_booking_request(
    resource: Resource,
    start: datetime,
    profile: UserProfile,
    *,
    organization: int = ORGANIZATION_ID,
    timezone_name: str = FACILITY_TIMEZONE,
) -> BookingRequest:
    """Create the request for booking ``resource`` at ``start``.

    The end instant is the start plus the resource's fixed duration.
    """

    start = parse_instant(start)
    return BookingRequest(
        resource=resource,
        start=start,
        end=start + timedelta(minutes=resource.config.duration_minutes),
        organization=organization,
        timezone=timezone_name,
        email=profile.email,
        fields=profile.booking_fields(),
    )


__all__ = ["build_booking_request"]
