"""Date/time helper utilities for availability processing."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Union

import pytz

from infrastructure.constants import BOOKING_WINDOW_DAYS, FACILITY_TIMEZONE

Instant = Union[str, datetime]


def parse_instant(value: Instant) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Accepts ISO-8601 strings with a ``Z`` suffix or an explicit offset.
    Naive values are read as UTC. Raises ``ValueError`` for anything else.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported instant: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_wire(value: Instant) -> str:
    """Serialize an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    instant = parse_instant(value)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_local(value: Instant, timezone_name: str = FACILITY_TIMEZONE) -> datetime:
    return parse_instant(value).astimezone(pytz.timezone(timezone_name))


def local_date_of(value: Instant, timezone_name: str = FACILITY_TIMEZONE) -> date:
    return to_local(value, timezone_name).date()


def localize(
    local_date: date,
    local_time: Union[str, time],
    timezone_name: str = FACILITY_TIMEZONE,
) -> datetime:
    """Interpret a wall-clock date and time in ``timezone_name``.

    Returns the matching UTC instant. Ambiguous times during the DST fall-back
    hour resolve to the standard-time reading.
    """
    if isinstance(local_time, str):
        local_time = datetime.strptime(local_time.strip(), "%H:%M").time()
    tz = pytz.timezone(timezone_name)
    localized = tz.normalize(tz.localize(datetime.combine(local_date, local_time), is_dst=False))
    return localized.astimezone(timezone.utc)


def bookable_dates(
    today: date, window_days: int = BOOKING_WINDOW_DAYS
) -> List[date]:
    """Dates from ``today`` up to ``window_days`` ahead, inclusive."""
    return [today + timedelta(days=offset) for offset in range(window_days + 1)]


def format_local(
    value: Instant, fmt: str, timezone_name: str = FACILITY_TIMEZONE
) -> str:
    return to_local(value, timezone_name).strftime(fmt)
