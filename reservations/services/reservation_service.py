"""Domain service wiring availability, booking, scheduling and profile storage."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import List, Optional, Tuple, Union

import pytz

from automation.availability import AvailabilityChecker, bookable_dates, localize
from automation.executors import BookingExecutor
from automation.shared.booking_contracts import BookingRecord, BookingResult
from botapp import notifications
from botapp.notifications import Notifier
from infrastructure.constants import (
    DEFAULT_DESIRED_TIME,
    DEFAULT_FIRE_TIME,
    FACILITY_TIMEZONE,
    Resource,
)
from reservations.models import ScheduledJob, UserProfile
from reservations.queue import ReservationScheduler, ReservationTracker, ScheduledJobQueue
from users.manager import ProfileManager


class ReservationService:
    """High-level API used by the presentation layer.

    Every failure is turned into a notification; callers receive plain
    values or result objects and never have to catch booking errors.
    """

    def __init__(
        self,
        availability: AvailabilityChecker,
        executor: BookingExecutor,
        scheduler: ReservationScheduler,
        profiles: ProfileManager,
        tracker: ReservationTracker,
        notifier: Notifier,
        *,
        timezone_name: str = FACILITY_TIMEZONE,
    ) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.availability = availability
        self.executor = executor
        self.scheduler = scheduler
        self.profiles = profiles
        self.tracker = tracker
        self.notifier = notifier
        self.timezone_name = timezone_name

    @property
    def queue(self) -> ScheduledJobQueue:
        return self.scheduler.queue

    async def load_slots(self, resource: Resource, local_date: date) -> List[datetime]:
        """Available start instants of ``resource`` on a local calendar date."""

        result = await self.availability.check_day(Resource.parse(resource), local_date)
        if not result.success:
            self.notifier.notify(
                notifications.AVAILABILITY_FAILED,
                notifications.AVAILABILITY_FAILED_DESCRIPTION,
            )
            return []
        return result.slots

    async def book_now(self, resource: Resource, start: datetime) -> BookingResult:
        """Attempt an immediate booking with the stored profile."""

        profile = self.profiles.get_profile()
        return await self.executor.execute(Resource.parse(resource), start, profile)

    def schedule_booking(
        self,
        resource: Resource,
        desired_start: datetime,
        fire_at: datetime,
    ) -> str:
        """Queue a booking attempt for ``fire_at`` and arm its timer."""

        job_id = self.scheduler.schedule(Resource.parse(resource), desired_start, fire_at)
        self.notifier.notify(
            notifications.SCHEDULE_CREATED,
            notifications.SCHEDULE_CREATED_DESCRIPTION,
        )
        return job_id

    def cancel_scheduled(self, job_id: str) -> bool:
        removed = self.scheduler.cancel(job_id)
        if removed:
            self.notifier.notify(notifications.SCHEDULE_CANCELLED)
        else:
            self.logger.info("Scheduled job %s was no longer queued", job_id)
        return removed

    def list_scheduled(self) -> List[ScheduledJob]:
        return self.queue.list()

    def list_bookings(self) -> List[BookingRecord]:
        return self.tracker.list_bookings()

    def get_profile(self) -> UserProfile:
        return self.profiles.get_profile()

    def update_profile(self, **fields: str) -> UserProfile:
        profile = self.profiles.update_profile(**fields)
        self.notifier.notify(notifications.SETTINGS_SAVED)
        return profile

    def today(self) -> date:
        """Current calendar date at the facility."""
        return datetime.now(pytz.timezone(self.timezone_name)).date()

    def bookable_dates(self, today: Optional[date] = None) -> List[date]:
        """Dates inside the facility's booking window."""
        return bookable_dates(today or self.today())

    def local_instant(self, local_date: date, local_time: Union[str, time]) -> datetime:
        """Interpret a facility wall-clock date and time as a UTC instant."""
        return localize(local_date, local_time, self.timezone_name)

    def default_schedule(self, today: Optional[date] = None) -> Tuple[datetime, datetime]:
        """Initial desired start and fire instant for a new scheduled booking.

        The desired slot is the last day of the booking window at
        ``DEFAULT_DESIRED_TIME``; the attempt fires today at ``DEFAULT_FIRE_TIME``.
        """
        today = today or self.today()
        desired_start = self.local_instant(self.bookable_dates(today)[-1], DEFAULT_DESIRED_TIME)
        return desired_start, self.local_instant(today, DEFAULT_FIRE_TIME)


__all__ = ["ReservationService"]
