"""
Reservation Tracker Module

Keeps the history of confirmed bookings, most recent first.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from automation.shared.booking_contracts import BookingRecord
from infrastructure.constants import STORE_KEYS
from infrastructure.store import KeyValueStore


class ReservationTracker:
    """Booking history backed by the ``app_bookings`` store slot."""

    def __init__(self, store: KeyValueStore, *, key: str = STORE_KEYS['bookings']) -> None:
        self.store = store
        self.key = key
        self.logger = logging.getLogger('BookingHistory')

    def _load_payloads(self) -> List[Dict[str, Any]]:
        payload = self.store.get(self.key, [])
        if not isinstance(payload, list):
            self.logger.warning(
                "Invalid booking history format; expected list, received %s",
                type(payload).__name__,
            )
            return []
        return [entry for entry in payload if isinstance(entry, dict)]

    def add_completed_booking(self, record: BookingRecord) -> None:
        """Prepend a confirmed booking to the history."""

        payloads = self._load_payloads()
        payloads.insert(0, dict(record.raw) if record.raw else _record_to_payload(record))
        self.store.set(self.key, payloads)
        self.logger.info(
            "Added completed booking %s (%s) starting %s",
            record.id,
            record.service.name,
            record.start.isoformat(),
        )

    def list_bookings(self) -> List[BookingRecord]:
        """Return stored bookings, skipping entries that no longer parse."""

        records: List[BookingRecord] = []
        for entry in self._load_payloads():
            try:
                records.append(BookingRecord.from_payload(entry))
            except ValueError as exc:
                self.logger.warning("Skipping unreadable booking entry: %s", exc)
        return records


def _record_to_payload(record: BookingRecord) -> Dict[str, Any]:
    return {
        'id': record.id,
        'url': record.url,
        'email': record.email,
        'start': record.start.isoformat(),
        'end': record.end.isoformat(),
        'timezone': record.timezone,
        'service': {
            'id': record.service.id,
            'name': record.service.name,
            'duration': record.service.duration,
        },
        'bookable': {'id': record.bookable.id, 'name': record.bookable.name},
    }
