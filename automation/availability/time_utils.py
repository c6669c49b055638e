"""Time filtering helpers for availability results."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List

from automation.availability.datetime_helpers import (
    Instant,
    local_date_of,
    parse_instant,
    to_local,
)
from infrastructure.constants import FACILITY_TIMEZONE


def filter_slots_for_local_date(
    slots: Iterable[Instant],
    target_date: date,
    timezone_name: str = FACILITY_TIMEZONE,
) -> List[datetime]:
    """Keep the slots whose local calendar date in ``timezone_name`` is ``target_date``.

    The comparison is made on the local wall-clock date, so an instant just
    after local midnight belongs to the next day even when its UTC date is
    still the previous one. Input order is preserved.
    """

    return [
        parse_instant(slot)
        for slot in slots
        if local_date_of(slot, timezone_name) == target_date
    ]


def format_slot_label(slot: Instant, timezone_name: str = FACILITY_TIMEZONE) -> str:
    """Local ``HH:MM`` label for a slot button."""

    return to_local(slot, timezone_name).strftime("%H:%M")
