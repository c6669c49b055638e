"""Domain dataclasses for profiles and scheduled jobs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, List, Mapping, Tuple

from automation.availability.datetime_helpers import parse_instant
from infrastructure.constants import PROFILE_FIELD_NAMES, Resource


REQUIRED_PROFILE_FIELDS: Tuple[str, ...] = (
    'email',
    'given_name',
    'family_name',
    'locality',
    'phone',
)


@dataclass(frozen=True)
class UserProfile:
    """Contact details sent with every booking."""

    email: str = ""
    given_name: str = ""
    family_name: str = ""
    locality: str = ""
    phone: str = ""

    @classmethod
    def from_storage(cls, payload: Any) -> "UserProfile":
        if not isinstance(payload, Mapping):
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{
            key: str(value).strip()
            for key, value in payload.items()
            if key in known and value is not None
        })

    def to_storage(self) -> Dict[str, str]:
        return asdict(self)

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_PROFILE_FIELDS if not getattr(self, name).strip()]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def booking_fields(self) -> Dict[str, str]:
        """Profile values keyed by the booking form's field names."""

        return {
            external: getattr(self, name)
            for name, external in PROFILE_FIELD_NAMES.items()
        }


@dataclass(frozen=True)
class ScheduledJob:
    """A booking attempt to fire automatically at ``fire_at``."""

    id: str
    resource: Resource
    desired_start: datetime
    fire_at: datetime

    @classmethod
    def from_storage(cls, payload: Mapping[str, Any]) -> "ScheduledJob":
        """Hydrate a stored job, raising ``ValueError`` when malformed."""

        if not isinstance(payload, Mapping):
            raise ValueError("Scheduled job must be a JSON object")
        job_id = payload.get('id')
        if not job_id:
            raise ValueError("Scheduled job is missing its identifier")
        try:
            return cls(
                id=str(job_id),
                resource=Resource.parse(payload['resource']),
                desired_start=parse_instant(payload['desired_start']),
                fire_at=parse_instant(payload['fire_at']),
            )
        except KeyError as exc:
            raise ValueError(f"Scheduled job missing field {exc}") from exc

    def to_storage(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'resource': self.resource.value,
            'desired_start': self.desired_start.isoformat(),
            'fire_at': self.fire_at.isoformat(),
        }


__all__ = ["REQUIRED_PROFILE_FIELDS", "ScheduledJob", "UserProfile"]
