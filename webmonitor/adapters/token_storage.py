"""
Client-local storage adapters.

Implement TokenStoragePort. The dashboard owns exactly one durable value
(the credential token under "token"), but the adapters are plain key/value
stores so the key name stays configuration.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryStorage:
    """Process-local storage - suitable for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        """Clear all values - useful for testing."""
        self._values.clear()


class JsonFileStorage:
    """
    JSON file backed storage for the CLI and desktop runs.

    The whole file is rewritten on every change. A missing or unreadable
    file reads as empty.
    """

    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path)
        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        # Owner-only: the file holds the bearer token
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class FletClientStorage:
    """
    flet ``page.client_storage`` adapter.

    In a browser this is localStorage; on desktop flet persists it per app.
    """

    def __init__(self, client_storage: Any) -> None:
        self._storage = client_storage

    def get(self, key: str) -> str | None:
        value = self._storage.get(key)
        return str(value) if value is not None else None

    def set(self, key: str, value: str) -> None:
        self._storage.set(key, value)

    def remove(self, key: str) -> None:
        if self._storage.contains_key(key):
            self._storage.remove(key)
