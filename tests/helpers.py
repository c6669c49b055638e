"""Shared fakes and utilities for unit tests."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from automation.shared.booking_contracts import BookingResult
from reservations.models import UserProfile


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        self._record("exception", *args, **kwargs)

    @property
    def messages(self) -> List[Tuple[str, Any]]:
        """Return formatted messages for quick assertions."""

        formatted: List[Tuple[str, Any]] = []
        for level, args, _kwargs in self.records:
            message: Any = None
            if args:
                template = args[0]
                if isinstance(template, str) and len(args) > 1:
                    try:
                        message = template % args[1:]
                    except (TypeError, ValueError):
                        message = template
                else:
                    message = template
            formatted.append((level, message))
        return formatted

    def levels(self) -> List[str]:
        return [level for level, _args, _kwargs in self.records]


class MemoryStore:
    """In-memory key-value store; values round-trip through JSON like on disk."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, str] = {}
        self.writes: List[str] = []
        for key, value in (initial or {}).items():
            self.data[key] = json.dumps(value)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self.data:
            return default
        return json.loads(self.data[key])

    def set(self, key: str, value: Any) -> None:
        self.data[key] = json.dumps(value)
        self.writes.append(key)


class RecordingNotifier:
    """Collects ``(title, description)`` pairs."""

    def __init__(self) -> None:
        self.notifications: List[Tuple[str, Optional[str]]] = []

    def notify(self, title: str, description: Optional[str] = None) -> None:
        self.notifications.append((title, description))

    @property
    def titles(self) -> List[str]:
        return [title for title, _description in self.notifications]


class FakeClock:
    """Virtual clock paired with a sleep that advances it.

    With ``auto_advance`` every sleep completes on the next loop tick. Without
    it sleeps block until :meth:`release` is called.
    """

    def __init__(self, now: datetime, *, auto_advance: bool = True) -> None:
        self.now = now
        self.auto_advance = auto_advance
        self.sleeps: List[float] = []
        self._gate: Optional[asyncio.Event] = None

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def release(self) -> None:
        self._event().set()

    def _event(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        if not self.auto_advance:
            await self._event().wait()
        self.advance(delay)
        await asyncio.sleep(0)


class RecordingExecutor:
    """Booking executor double returning a fixed result."""

    def __init__(self, result: Optional[BookingResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[Any, datetime, UserProfile]] = []
        self.gate: Optional[asyncio.Event] = None

    async def execute(self, resource, start, profile) -> BookingResult:
        self.calls.append((resource, start, profile))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


COMPLETE_PROFILE = {
    "email": "ana@example.com",
    "given_name": "Ana",
    "family_name": "Garcia",
    "locality": "Estivella",
    "phone": "600123123",
}


def booking_confirmation(
    *,
    booking_id: int = 987,
    start: str = "2025-06-11T07:00:00.000Z",
    end: str = "2025-06-11T08:30:00.000Z",
    service_name: str = "Pádel",
    duration: int = 90,
) -> Dict[str, Any]:
    """Body of a successful booking response."""

    return {
        "id": booking_id,
        "url": f"https://appointlet.com/b/{booking_id}",
        "email": COMPLETE_PROFILE["email"],
        "start": start,
        "end": end,
        "timezone": "Europe/Madrid",
        "service": {"id": 570818, "name": service_name, "duration": duration},
        "bookable": {"id": 194780, "name": "Pista de pádel"},
    }
