"""Dependency container wiring runtime components together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from automation.availability import AvailabilityChecker
from automation.executors import BookingExecutor
from botapp.notifications import Notifier, build_notifier
from infrastructure.constants import DEFAULT_HEADERS
from infrastructure.settings import AppSettings
from infrastructure.store import JsonFileStore, KeyValueStore
from reservations.queue import ReservationScheduler, ReservationTracker, ScheduledJobQueue
from reservations.services import ReservationService
from users.manager import ProfileManager


@dataclass(frozen=True)
class BotDependencies:
    """Concrete dependency snapshot for the booking runtime."""

    settings: AppSettings
    http_client: httpx.AsyncClient
    store: KeyValueStore
    notifier: Notifier
    profiles: ProfileManager
    tracker: ReservationTracker
    queue: ScheduledJobQueue
    availability: AvailabilityChecker
    executor: BookingExecutor
    scheduler: ReservationScheduler
    service: ReservationService


def build_http_client(settings: AppSettings) -> httpx.AsyncClient:
    """Shared client for availability lookups and booking submissions."""

    return httpx.AsyncClient(
        headers=DEFAULT_HEADERS,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
    )


def build_dependencies(
    settings: AppSettings,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    store: Optional[KeyValueStore] = None,
    notifier: Optional[Notifier] = None,
) -> BotDependencies:
    """Build every runtime component from ``settings``.

    The overrides let tests substitute the HTTP transport, the persistent
    store and the notification surface.
    """

    http_client = http_client or build_http_client(settings)
    store = store if store is not None else JsonFileStore(settings.data_directory)
    notifier = notifier or build_notifier(settings)

    profiles = ProfileManager(store)
    tracker = ReservationTracker(store)
    queue = ScheduledJobQueue(store)
    availability = AvailabilityChecker(
        http_client,
        base_url=settings.api_base_url,
        timezone_name=settings.timezone,
    )
    executor = BookingExecutor(
        http_client,
        tracker,
        notifier,
        base_url=settings.api_base_url,
        organization_id=settings.organization_id,
        timezone_name=settings.timezone,
    )
    scheduler = ReservationScheduler(queue, executor, profiles)
    service = ReservationService(
        availability,
        executor,
        scheduler,
        profiles,
        tracker,
        notifier,
        timezone_name=settings.timezone,
    )

    return BotDependencies(
        settings=settings,
        http_client=http_client,
        store=store,
        notifier=notifier,
        profiles=profiles,
        tracker=tracker,
        queue=queue,
        availability=availability,
        executor=executor,
        scheduler=scheduler,
        service=service,
    )


__all__ = ['BotDependencies', 'build_dependencies', 'build_http_client']
