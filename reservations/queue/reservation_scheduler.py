"""
Reservation Scheduler
Arms one wall-clock timer per scheduled job and fires the booking attempt
when the timer elapses
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, List, Optional

import pytz

from reservations.models import ScheduledJob
from reservations.queue.reservation_queue import ScheduledJobQueue
from reservations.queue.scheduler import JobTimer, SchedulerStats, TimerState, delay_until
from users.manager import ProfileManager

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from automation.executors.booking import BookingExecutor


Clock = Callable[[], datetime]
Sleeper = Callable[[float], Awaitable[None]]


def utc_now() -> datetime:
    return datetime.now(pytz.UTC)


class ReservationScheduler:
    """
    Keeps exactly one timer per queued job

    A job leaves the queue after its single booking attempt, whatever the
    outcome. Jobs whose fire instant is already in the past when they are
    armed fire immediately.
    """

    def __init__(
        self,
        queue: ScheduledJobQueue,
        executor: "BookingExecutor",
        profiles: ProfileManager,
        *,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        self.queue = queue
        self.executor = executor
        self.profiles = profiles
        self.clock = clock or utc_now
        self._sleep = sleep or asyncio.sleep
        self.timers: Dict[str, JobTimer] = {}
        self.stats = SchedulerStats()
        self.logger = logging.getLogger('ReservationScheduler')

    def state(self, job_id: str) -> TimerState:
        """Lifecycle state of a job as seen by the scheduler."""
        timer = self.timers.get(job_id)
        if timer is not None:
            return timer.state
        if self.queue.get(job_id) is not None:
            return TimerState.PENDING
        return TimerState.REMOVED

    def pending_jobs(self) -> List[ScheduledJob]:
        return [timer.job for timer in self.timers.values() if timer.pending]

    @property
    def armed_job_ids(self) -> List[str]:
        """Identifiers of jobs waiting for their timer."""
        return [job_id for job_id, timer in self.timers.items() if timer.pending]

    def sync(self) -> None:
        """
        Reconcile timers with the queue contents

        Timers whose job has left the queue are cancelled and every queued job
        without a timer is armed. An attempt already in flight is left alone.
        Must be called from within the running event loop.
        """
        queued = {job.id: job for job in self.queue.list()}

        for job_id, timer in list(self.timers.items()):
            if job_id not in queued and timer.pending:
                self._disarm(job_id)

        armed = 0
        for job in queued.values():
            if job.id not in self.timers:
                self._arm(job)
                armed += 1

        self.logger.debug(
            "Scheduler synced: %s queued, %s newly armed, %s timers live",
            len(queued),
            armed,
            len(self.timers),
        )

    def schedule(self, resource, desired_start, fire_at) -> str:
        """Queue a new job and arm its timer."""
        job_id = self.queue.create(resource, desired_start, fire_at)
        self.sync()
        return job_id

    def cancel(self, job_id: str) -> bool:
        """
        Drop a scheduled job

        A pending timer is cancelled so the attempt never happens. A job whose
        attempt is already running is removed from the queue but the attempt
        is allowed to finish.

        Returns:
            bool: True if the job was still queued
        """
        timer = self.timers.get(job_id)
        if timer is not None and timer.pending:
            self._disarm(job_id)
        elif timer is not None and timer.firing:
            self.logger.info("Job %s is already firing; its attempt will complete", job_id)
        return self.queue.remove(job_id)

    async def stop(self) -> None:
        """Cancel pending timers and wait for in-flight attempts."""
        for job_id, timer in list(self.timers.items()):
            if timer.pending:
                self._disarm(job_id, count=False)
        await self.wait_idle()
        self.logger.info("Reservation scheduler stopped")

    async def wait_idle(self) -> None:
        """Wait until every live timer task has finished."""
        while True:
            tasks = [timer.task for timer in self.timers.values() if timer.task is not None]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
            # A cancelled task never reaches its own cleanup
            for job_id, timer in list(self.timers.items()):
                if timer.task is not None and timer.task.done():
                    self.timers.pop(job_id, None)

    def get_performance_report(self) -> str:
        return self.stats.format_report()

    def _arm(self, job: ScheduledJob) -> None:
        delay = delay_until(job.fire_at, self.clock())
        timer = JobTimer(job=job, delay=delay)
        self.timers[job.id] = timer
        timer.task = asyncio.get_running_loop().create_task(
            self._run(timer), name=f"scheduled-job-{job.id}"
        )
        self.stats.record_armed()
        self.logger.info(f"""TIMER ARMED
        Job ID: {job.id}
        Resource: {job.resource.value}
        Fires at: {job.fire_at.isoformat()}
        Delay: {delay:.1f}s
        """)

    def _disarm(self, job_id: str, *, count: bool = True) -> None:
        timer = self.timers.pop(job_id, None)
        if timer is None:
            return
        timer.state = TimerState.REMOVED
        if timer.task is not None and not timer.task.done():
            timer.task.cancel()
        if count:
            self.stats.record_cancelled()
        self.logger.info("Cancelled timer for job %s", job_id)

    async def _run(self, timer: JobTimer) -> None:
        await self._sleep(timer.delay)
        if not timer.pending:
            return
        await self._fire(timer)

    async def _fire(self, timer: JobTimer) -> None:
        job = timer.job
        timer.state = TimerState.FIRING
        self.logger.info(
            "Firing job %s: %s at %s",
            job.id,
            job.resource.value,
            job.desired_start.isoformat(),
        )
        started = time.monotonic()
        try:
            profile = self.profiles.get_profile()
            result = await self.executor.execute(job.resource, job.desired_start, profile)
        except Exception:
            self.stats.record_error(time.monotonic() - started)
            self.logger.exception("Scheduled job %s raised during its booking attempt", job.id)
        else:
            elapsed = time.monotonic() - started
            if result.success:
                self.stats.record_success(elapsed)
                self.logger.info("Scheduled job %s booked successfully", job.id)
            else:
                self.stats.record_failure(elapsed)
                self.logger.warning("Scheduled job %s failed: %s", job.id, result.message)

        self.queue.remove(job.id)
        timer.state = TimerState.REMOVED
        if self.timers.get(job.id) is timer:
            self.timers.pop(job.id)


__all__ = ["ReservationScheduler", "utc_now"]
