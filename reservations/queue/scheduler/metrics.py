"""Statistics helpers for the reservation scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SchedulerStats:
    """Mutable counters tracking scheduled booking attempts."""

    jobs_armed: int = 0
    jobs_cancelled: int = 0
    total_attempts: int = 0
    successful_bookings: int = 0
    failed_bookings: int = 0
    unexpected_errors: int = 0
    total_execution_time: float = 0.0

    def record_armed(self) -> None:
        self.jobs_armed += 1

    def record_cancelled(self) -> None:
        self.jobs_cancelled += 1

    def record_success(self, execution_time: Optional[float] = None) -> None:
        self.successful_bookings += 1
        self.total_attempts += 1
        self._record_execution_time(execution_time)

    def record_failure(self, execution_time: Optional[float] = None) -> None:
        self.failed_bookings += 1
        self.total_attempts += 1
        self._record_execution_time(execution_time)

    def record_error(self, execution_time: Optional[float] = None) -> None:
        """An attempt that raised instead of returning a result."""
        self.unexpected_errors += 1
        self.total_attempts += 1
        self._record_execution_time(execution_time)

    def _record_execution_time(self, execution_time: Optional[float]) -> None:
        if execution_time is None:
            return
        try:
            value = float(execution_time)
        except (TypeError, ValueError):
            return
        if value < 0:
            return
        self.total_execution_time += value

    @property
    def avg_execution_time(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.total_execution_time / self.total_attempts

    @property
    def success_rate(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return (self.successful_bookings / self.total_attempts) * 100

    def format_report(self) -> str:
        lines = [
            "📊 Scheduled Booking Report",
            f"⏰ Armed: {self.jobs_armed}",
            f"✅ Successful: {self.successful_bookings}",
            f"❌ Failed: {self.failed_bookings}",
            f"📈 Total Attempts: {self.total_attempts}",
            f"🏆 Success Rate: {self.success_rate:.2f}%",
            f"⏱️ Avg Execution Time: {self.avg_execution_time:.2f}s",
        ]
        if self.jobs_cancelled:
            lines.append(f"🚫 Cancelled: {self.jobs_cancelled}")
        if self.unexpected_errors:
            lines.append(f"💥 Unexpected Errors: {self.unexpected_errors}")
        return "\n".join(lines)
