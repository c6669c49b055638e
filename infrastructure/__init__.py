"""Infrastructure helpers."""

from .settings import get_settings, load_settings, AppSettings
from .store import JsonFileStore, KeyValueStore

__all__ = [
    "get_settings",
    "load_settings",
    "AppSettings",
    "JsonFileStore",
    "KeyValueStore",
]
