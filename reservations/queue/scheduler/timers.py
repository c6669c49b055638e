"""Per-job timer bookkeeping for the reservation scheduler."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from reservations.models import ScheduledJob


class TimerState(Enum):
    PENDING = "pending"
    FIRING = "firing"
    REMOVED = "removed"


@dataclass
class JobTimer:
    """Timer armed for one scheduled job."""

    job: ScheduledJob
    delay: float
    task: Optional[asyncio.Task] = None
    state: TimerState = field(default=TimerState.PENDING)

    @property
    def pending(self) -> bool:
        return self.state == TimerState.PENDING

    @property
    def firing(self) -> bool:
        return self.state == TimerState.FIRING


def delay_until(fire_at: datetime, now: datetime) -> float:
    """Seconds from ``now`` until ``fire_at``, never negative.

    Jobs whose instant has already passed fire immediately.
    """
    return max(0.0, (fire_at - now).total_seconds())


__all__ = ["JobTimer", "TimerState", "delay_until"]
