"""
Profile Management for the booking bot
Handles persistent storage and retrieval of the booking contact details
"""

import logging
from typing import Any, List, Optional

from infrastructure.constants import STORE_KEYS
from infrastructure.store import KeyValueStore
from reservations.models import REQUIRED_PROFILE_FIELDS, UserProfile


class ProfileManager:
    """
    Manages the user's booking profile in the persistent store

    The profile is the only settings record of the application. It is read
    fresh on every access so a scheduled job always books with the latest
    contact details.
    """

    def __init__(self, store: KeyValueStore, *, key: str = STORE_KEYS['settings']) -> None:
        """
        Initialize the ProfileManager

        Args:
            store: Key-value store holding the settings slot
            key: Name of the settings slot
        """
        self.store = store
        self.key = key
        self.logger = logging.getLogger('ProfileManager')

    def get_profile(self) -> UserProfile:
        """
        Load the stored profile

        Returns:
            UserProfile, empty when nothing (or nothing readable) is stored
        """
        payload = self.store.get(self.key)
        if payload is not None and not isinstance(payload, dict):
            self.logger.warning(
                "Ignoring stored settings of type %s; using empty profile",
                type(payload).__name__,
            )
        return UserProfile.from_storage(payload)

    def update_profile(self, **changes: Any) -> UserProfile:
        """
        Update selected profile fields and persist the result

        Args:
            **changes: Field values keyed by UserProfile attribute name

        Returns:
            The updated profile

        Raises:
            ValueError: If a key is not a profile field
        """
        unknown = sorted(set(changes) - set(REQUIRED_PROFILE_FIELDS))
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(unknown)}")

        current = self.get_profile().to_storage()
        for name, value in changes.items():
            current[name] = "" if value is None else str(value).strip()

        profile = UserProfile.from_storage(current)
        self.store.set(self.key, profile.to_storage())

        missing = profile.missing_fields()
        self.logger.info(
            "Saved profile (%s)",
            "complete" if not missing else f"missing: {', '.join(missing)}",
        )
        return profile

    def get_missing_profile_fields(self, profile: Optional[UserProfile] = None) -> List[str]:
        """Return required profile fields that are empty."""
        profile = profile if profile is not None else self.get_profile()
        return profile.missing_fields()
