"""Storage backends for the persisted key/schema slots."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
import threading
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# One lock per state file, shared by every JsonFileStorage on that path
_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.expanduser().resolve()
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.RLock()
        return lock


@runtime_checkable
class StoragePort(Protocol):
    """Named string slots that survive across sessions."""

    def get(self, slot: str) -> Optional[str]:
        """Return the stored value, or None if the slot is empty."""
        ...

    def set(self, slot: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove(self, slot: str) -> None:
        """Clear a slot. Clearing an empty slot is a no-op."""
        ...


class MemoryStorage:
    """In-process storage, used by tests and one-shot CLI runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> Optional[str]:
        return self._values.get(slot)

    def set(self, slot: str, value: str) -> None:
        self._values[slot] = value

    def remove(self, slot: str) -> None:
        self._values.pop(slot, None)


class JsonFileStorage:
    """Slots persisted as a flat JSON object on disk.

    Values are stored verbatim; there is no versioning or encryption.
    Every write replaces the whole file; read-modify-write cycles are
    serialised per path so concurrent writers to different slots do not
    lose each other's updates.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self.path}: expected a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def get(self, slot: str) -> Optional[str]:
        with self._lock:
            return self._load().get(slot)

    def set(self, slot: str, value: str) -> None:
        with self._lock:
            values = self._load()
            values[slot] = value
            self._save(values)

    def remove(self, slot: str) -> None:
        with self._lock:
            values = self._load()
            if values.pop(slot, None) is not None:
                self._save(values)
