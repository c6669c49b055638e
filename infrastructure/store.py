"""Key-value persistence for settings, booking history and scheduled jobs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Named slots holding JSON-serialisable values."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class JsonFileStore:
    """Read/write each named slot to ``<data_directory>/<key>.json``.

    Reads never raise: a missing slot yields ``default`` and a slot whose
    contents cannot be parsed is logged and also yields ``default``. Writes
    replace the whole file atomically.
    """

    def __init__(self, data_directory: str, *, logger: Optional[Any] = None) -> None:
        self._directory = Path(data_directory)
        self._logger = logger or logging.getLogger('JsonFileStore')

    def path_for(self, key: str) -> Path:
        if not key or '/' in key or '\\' in key:
            raise ValueError(f"Invalid store key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """Load the value stored under ``key``, returning ``default`` on failure."""

        path = self.path_for(key)
        if not path.exists():
            self._logger.debug("Store slot %s does not exist; using default", key)
            return default

        try:
            with path.open('r', encoding='utf-8') as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            self._logger.warning(
                "Discarding unreadable store slot %s (%s): %s", key, path, exc
            )
            return default

    def set(self, key: str, value: Any) -> None:
        """Persist ``value`` under ``key``, ensuring parent directories exist."""

        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Optional[Path] = None
        try:
            with NamedTemporaryFile(
                'w', encoding='utf-8', dir=path.parent, suffix='.tmp', delete=False
            ) as handle:
                tmp_path = Path(handle.name)
                json.dump(value, handle, indent=2, ensure_ascii=False)
                handle.write('\n')
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError):
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise
        self._logger.debug("Store slot %s saved to %s", key, path)
