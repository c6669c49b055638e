"""Availability lookup and timezone-aware slot filtering."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .checker import AvailabilityChecker
    from .datetime_helpers import bookable_dates, localize, parse_instant, to_wire
    from .time_utils import filter_slots_for_local_date, format_slot_label

__all__ = [
    "AvailabilityChecker",
    "bookable_dates",
    "filter_slots_for_local_date",
    "format_slot_label",
    "localize",
    "parse_instant",
    "to_wire",
]

_EXPORTS = {
    "AvailabilityChecker": "checker",
    "bookable_dates": "datetime_helpers",
    "localize": "datetime_helpers",
    "parse_instant": "datetime_helpers",
    "to_wire": "datetime_helpers",
    "filter_slots_for_local_date": "time_utils",
    "format_slot_label": "time_utils",
}


def __getattr__(name: str):
    # Submodules import booking contracts, which import datetime_helpers
    if name not in _EXPORTS:
        raise AttributeError(name)
    module = import_module(f"automation.availability.{_EXPORTS[name]}")
    return getattr(module, name)
