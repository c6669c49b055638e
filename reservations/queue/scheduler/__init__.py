"""Scheduler helpers for the reservation queue."""

from .metrics import SchedulerStats
from .timers import JobTimer, TimerState, delay_until

__all__ = [
    "JobTimer",
    "SchedulerStats",
    "TimerState",
    "delay_until",
]
