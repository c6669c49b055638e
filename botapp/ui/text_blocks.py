"""Reusable helpers for composing the schedule and booking summaries."""

from __future__ import annotations

from typing import Iterable, List

from telegram.helpers import escape_markdown

from automation.availability.datetime_helpers import format_local
from automation.shared.booking_contracts import BookingRecord
from infrastructure.constants import FACILITY_TIMEZONE
from reservations.models import ScheduledJob

DAY_TIME_FORMAT = "%d/%m %H:%M"


def format_job_line(job: ScheduledJob, timezone_name: str = FACILITY_TIMEZONE) -> str:
    """Headline of a scheduled job, e.g. ``Pádel → 11/06 09:00``."""
    when = format_local(job.desired_start, DAY_TIME_FORMAT, timezone_name)
    return f"{job.resource.config.label} → {when}"


def format_job_attempt_line(job: ScheduledJob, timezone_name: str = FACILITY_TIMEZONE) -> str:
    when = format_local(job.fire_at, DAY_TIME_FORMAT, timezone_name)
    return f"Se intentará a las {when}"


def format_booking_line(record: BookingRecord) -> str:
    """
    One confirmed booking, shown in the booking's own timezone.

    Args:
        record: Confirmation returned by the booking API

    Returns:
        Text such as ``11/06 09:00 - 10:30 (Europe/Madrid)``
    """
    start = format_local(record.start, DAY_TIME_FORMAT, record.timezone)
    end = format_local(record.end, "%H:%M", record.timezone)
    return f"{start} - {end} ({record.timezone})"


class MarkdownBlockBuilder:
    """Utility for building Markdown messages with bullet support."""

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: List[str] = []

    def heading(self, text: str) -> "MarkdownBlockBuilder":
        if text:
            self._lines.append(f"*{escape_markdown(text)}*")
        return self

    def bullet(self, text: str) -> "MarkdownBlockBuilder":
        if text:
            self._lines.append(f"• {escape_markdown(text)}")
        return self

    def line(self, text: str = "") -> "MarkdownBlockBuilder":
        self._lines.append(escape_markdown(text))
        return self

    def blank(self) -> "MarkdownBlockBuilder":
        self._lines.append("")
        return self

    def build(self) -> str:
        return "\n".join(self._lines)


def render_overview(
    jobs: Iterable[ScheduledJob],
    bookings: Iterable[BookingRecord],
    timezone_name: str = FACILITY_TIMEZONE,
) -> str:
    """Markdown summary of pending schedules and confirmed bookings."""
    builder = MarkdownBlockBuilder()

    builder.heading("Programadas")
    jobs = list(jobs)
    if not jobs:
        builder.line("No hay reservas programadas")
    for job in jobs:
        builder.bullet(format_job_line(job, timezone_name))
        builder.line(f"  {format_job_attempt_line(job, timezone_name)}")

    builder.blank().heading("Mis reservas")
    bookings = list(bookings)
    if not bookings:
        builder.line("No hay reservas todavía")
    for record in bookings:
        builder.bullet(f"{record.service.name}: {format_booking_line(record)}")

    return builder.build()


__all__ = [
    "DAY_TIME_FORMAT",
    "MarkdownBlockBuilder",
    "format_booking_line",
    "format_job_attempt_line",
    "format_job_line",
    "render_overview",
]
