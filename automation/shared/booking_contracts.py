"""Shared booking request/result contracts for the service, scheduler and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from automation.availability.datetime_helpers import parse_instant, to_wire
from infrastructure.constants import Resource


@dataclass(frozen=True)
class ServiceInfo:
    id: int
    name: str
    duration: int


@dataclass(frozen=True)
class BookableInfo:
    id: int
    name: str


@dataclass(frozen=True)
class BookingRecord:
    """Confirmation payload returned by the booking API."""

    id: str
    url: str
    email: str
    start: datetime
    end: datetime
    timezone: str
    service: ServiceInfo
    bookable: BookableInfo
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BookingRecord":
        """Parse an API confirmation, raising ``ValueError`` when malformed."""

        if not isinstance(payload, Mapping):
            raise ValueError("Booking confirmation must be a JSON object")
        try:
            service = payload["service"]
            bookable = payload["bookable"]
            return cls(
                id=str(payload["id"]),
                url=str(payload["url"]),
                email=str(payload["email"]),
                start=parse_instant(payload["start"]),
                end=parse_instant(payload["end"]),
                timezone=str(payload["timezone"]),
                service=ServiceInfo(
                    id=int(service["id"]),
                    name=str(service["name"]),
                    duration=int(service["duration"]),
                ),
                bookable=BookableInfo(id=int(bookable["id"]), name=str(bookable["name"])),
                raw=dict(payload),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed booking confirmation: {exc}") from exc


@dataclass(frozen=True)
class BookingRequest:
    """Canonical booking attempt handed to the executor."""

    resource: Resource
    start: datetime
    end: datetime
    organization: int
    timezone: str
    email: str
    fields: Dict[str, str]

    def to_payload(self) -> Dict[str, Any]:
        config = self.resource.config
        return {
            "organization": self.organization,
            "timezone": self.timezone,
            "email": self.email,
            "fields": dict(self.fields),
            "bookable": config.bookable_id,
            "service": config.service_id,
            "start": to_wire(self.start),
            "end": to_wire(self.end),
        }


class BookingErrorKind(Enum):
    """Why a booking attempt did not produce a confirmation."""

    INCOMPLETE_PROFILE = "incomplete_profile"
    BOOKING_REJECTED = "booking_rejected"


@dataclass(frozen=True)
class BookingError:
    kind: BookingErrorKind
    detail: str
    status_code: Optional[int] = None
    missing_fields: List[str] = field(default_factory=list)

    @classmethod
    def incomplete_profile(cls, missing: List[str]) -> "BookingError":
        return cls(
            kind=BookingErrorKind.INCOMPLETE_PROFILE,
            detail="Missing profile fields: " + ", ".join(missing),
            missing_fields=list(missing),
        )

    @classmethod
    def rejected(cls, detail: str, status_code: Optional[int] = None) -> "BookingError":
        return cls(kind=BookingErrorKind.BOOKING_REJECTED, detail=detail, status_code=status_code)


class BookingStatus(Enum):
    """Overall result of a booking attempt."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class BookingResult:
    """Outcome of a single booking attempt, success or failure."""

    status: BookingStatus
    record: Optional[BookingRecord] = None
    error: Optional[BookingError] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.status == BookingStatus.SUCCESS

    @property
    def message(self) -> str:
        if self.success and self.record is not None:
            return f"Booking {self.record.id} confirmed"
        return self.error.detail if self.error else "Unknown error"

    @classmethod
    def success_result(
        cls,
        record: BookingRecord,
        *,
        started_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
    ) -> "BookingResult":
        return cls(
            status=BookingStatus.SUCCESS,
            record=record,
            started_at=started_at,
            completed_at=completed_at,
        )

    @classmethod
    def failure_result(
        cls,
        error: BookingError,
        *,
        started_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
    ) -> "BookingResult":
        return cls(
            status=BookingStatus.FAILURE,
            error=error,
            started_at=started_at,
            completed_at=completed_at,
        )


@dataclass(frozen=True)
class AvailabilityError:
    """The availability query could not be completed."""

    detail: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class AvailabilityResult:
    resource: Resource
    slots: List[datetime] = field(default_factory=list)
    error: Optional[AvailabilityError] = None

    @property
    def success(self) -> bool:
        return self.error is None
