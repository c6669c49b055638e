"""Availability checker for the Appointlet bookable endpoints."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List

import httpx

from automation.availability.datetime_helpers import parse_instant
from automation.availability.time_utils import filter_slots_for_local_date
from automation.shared.booking_contracts import AvailabilityError, AvailabilityResult
from infrastructure.constants import APPOINTLET_API_URL, FACILITY_TIMEZONE, Resource

logger = logging.getLogger('AvailabilityClient')


class AvailabilityChecker:
    """Query available start times for a resource.

    The HTTP client is shared with the booking executor and owned by the
    caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = APPOINTLET_API_URL,
        timezone_name: str = FACILITY_TIMEZONE,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._timezone_name = timezone_name

    async def fetch_slots(self, resource: Resource) -> AvailabilityResult:
        """Return every slot the API reports for ``resource``."""

        url = resource.config.availability_url(self._base_url)
        logger.debug("Fetching availability for %s: %s", resource.value, url)
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Availability request for %s failed: %s", resource.value, exc)
            return AvailabilityResult(resource, error=AvailabilityError(str(exc) or type(exc).__name__))

        if not resp.is_success:
            logger.warning(
                "Availability request for %s returned HTTP %s", resource.value, resp.status_code
            )
            return AvailabilityResult(
                resource,
                error=AvailabilityError(f"HTTP {resp.status_code}", status_code=resp.status_code),
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning("Availability response for %s is not JSON: %s", resource.value, exc)
            return AvailabilityResult(resource, error=AvailabilityError("Invalid availability response"))

        if not isinstance(payload, list):
            logger.warning(
                "Availability response for %s is %s, expected a list",
                resource.value,
                type(payload).__name__,
            )
            return AvailabilityResult(resource, error=AvailabilityError("Invalid availability response"))

        slots: List[datetime] = []
        for raw in payload:
            try:
                slots.append(parse_instant(raw))
            except ValueError:
                logger.warning("Skipping unparseable slot %r for %s", raw, resource.value)

        logger.info("Found %s slots for %s", len(slots), resource.value)
        return AvailabilityResult(resource, slots=slots)

    async def check_day(self, resource: Resource, target_date: date) -> AvailabilityResult:
        """Slots for ``resource`` falling on ``target_date`` in the facility timezone."""

        result = await self.fetch_slots(resource)
        if not result.success:
            return result

        day_slots = filter_slots_for_local_date(result.slots, target_date, self._timezone_name)
        logger.debug(
            "%s: %s of %s slots fall on %s", resource.value, len(day_slots), len(result.slots), target_date
        )
        return AvailabilityResult(resource, slots=day_slots)
