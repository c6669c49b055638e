"""Queue and scheduling domain services."""

from __future__ import annotations

from .reservation_queue import ScheduledJobQueue
from .reservation_scheduler import ReservationScheduler
from .reservation_tracker import ReservationTracker

__all__ = [
    "ReservationScheduler",
    "ReservationTracker",
    "ScheduledJobQueue",
]
