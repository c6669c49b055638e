"""Booking executor posting a single reservation to the Appointlet API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import httpx
import pytz

from automation.executors.request_factory import build_booking_request
from automation.shared.booking_contracts import (
    BookingError,
    BookingRecord,
    BookingResult,
)
from botapp import notifications
from botapp.notifications import LoggingNotifier, Notifier
from infrastructure.constants import (
    APPOINTLET_API_URL,
    APPOINTLET_ORIGIN,
    FACILITY_TIMEZONE,
    ORGANIZATION_ID,
    Resource,
)
from reservations.models import UserProfile
from reservations.queue.reservation_tracker import ReservationTracker


class BookingExecutor:
    """Attempt one booking and report the outcome.

    Every attempt is a single POST. A profile missing any required field never
    reaches the network. Only a ``201`` with a readable confirmation counts as
    a booking; it is recorded in the history and announced to the user.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        tracker: ReservationTracker,
        notifier: Optional[Notifier] = None,
        *,
        base_url: str = APPOINTLET_API_URL,
        organization_id: int = ORGANIZATION_ID,
        timezone_name: str = FACILITY_TIMEZONE,
    ) -> None:
        self.client = client
        self.tracker = tracker
        self.notifier = notifier or LoggingNotifier()
        self.base_url = base_url.rstrip("/")
        self.organization_id = organization_id
        self.timezone_name = timezone_name
        self.logger = logging.getLogger("BookingExecutor")

    @property
    def bookings_url(self) -> str:
        return f"{self.base_url}/bookings"

    async def execute(
        self,
        resource: Resource,
        start: datetime,
        profile: UserProfile,
    ) -> BookingResult:
        """Book ``resource`` at ``start`` with the given contact details.

        Args:
            resource: Resource to book
            start: Slot instant, as reported by the availability endpoint
            profile: Contact details submitted with the booking

        Returns:
            BookingResult describing the confirmation or the failure
        """
        started_at = datetime.now(pytz.UTC)

        missing = profile.missing_fields()
        if missing:
            self.logger.warning(
                "Skipping %s booking at %s; profile incomplete: %s",
                resource.value,
                start.isoformat(),
                ", ".join(missing),
            )
            self.notifier.notify(
                notifications.PROFILE_INCOMPLETE,
                notifications.PROFILE_INCOMPLETE_DESCRIPTION,
            )
            return BookingResult.failure_result(
                BookingError.incomplete_profile(missing),
                started_at=started_at,
                completed_at=datetime.now(pytz.UTC),
            )

        request = build_booking_request(
            resource,
            start,
            profile,
            organization=self.organization_id,
            timezone_name=self.timezone_name,
        )
        self.logger.info(f"""BOOKING ATTEMPT
        Resource: {resource.value}
        Start: {request.start.isoformat()}
        End: {request.end.isoformat()}
        Email: {request.email}
        """)

        try:
            resp = await self.client.post(
                self.bookings_url,
                json=request.to_payload(),
                headers={"Origin": APPOINTLET_ORIGIN},
            )
        except httpx.HTTPError as exc:
            detail = str(exc) or type(exc).__name__
            self.logger.error("Booking request for %s failed: %s", resource.value, detail)
            return self._rejected(BookingError.rejected(detail), started_at)

        if resp.status_code != 201:
            detail = resp.text.strip() or f"Error {resp.status_code}"
            self.logger.warning(
                "Booking for %s at %s rejected with HTTP %s: %s",
                resource.value,
                request.start.isoformat(),
                resp.status_code,
                detail,
            )
            return self._rejected(BookingError.rejected(detail, resp.status_code), started_at)

        try:
            record = BookingRecord.from_payload(resp.json())
        except ValueError as exc:
            self.logger.error("Unreadable booking confirmation for %s: %s", resource.value, exc)
            return self._rejected(
                BookingError.rejected(f"Invalid confirmation: {exc}", resp.status_code),
                started_at,
            )

        try:
            self.tracker.add_completed_booking(record)
        except OSError as exc:
            self.logger.error(
                "Booking %s confirmed but could not be saved to the history: %s", record.id, exc
            )
        self.notifier.notify(
            notifications.BOOKING_CONFIRMED,
            notifications.BOOKING_CONFIRMED_DESCRIPTION,
        )
        self.logger.info(f"""BOOKING CONFIRMED
        Booking ID: {record.id}
        Service: {record.service.name}
        Start: {record.start.isoformat()}
        """)
        return BookingResult.success_result(
            record,
            started_at=started_at,
            completed_at=datetime.now(pytz.UTC),
        )

    def _rejected(self, error: BookingError, started_at: datetime) -> BookingResult:
        self.notifier.notify(notifications.BOOKING_FAILED, error.detail)
        return BookingResult.failure_result(
            error,
            started_at=started_at,
            completed_at=datetime.now(pytz.UTC),
        )
