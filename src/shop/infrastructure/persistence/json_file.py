"""Shared helpers for the JSON-file repositories.

Each file is a JSON list of records. A read-modify-write done under
``locked()`` holds two locks: a re-entrant thread lock shared by every
repository opened on the same path in this process, and an OS-level
lock on ``<file>.lock`` that serialises separate ``shop`` processes.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock

_registry_lock = threading.Lock()
_path_locks: dict[Path, tuple[threading.RLock, FileLock]] = {}


def _locks_for(path: Path) -> tuple[threading.RLock, FileLock]:
    with _registry_lock:
        locks = _path_locks.get(path)
        if locks is None:
            path.parent.mkdir(parents=True, exist_ok=True)
            locks = _path_locks[path] = (
                threading.RLock(),
                FileLock(str(path) + ".lock"),
            )
        return locks


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._thread_lock, self._process_lock = _locks_for(self._file_path)
        self._ensure_file()

    @contextmanager
    def locked(self) -> Iterator[None]:
        # Always thread lock, then file lock
        with self._thread_lock, self._process_lock:
            yield

    def load(self) -> list[dict]:
        with self.locked():
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        # Write a sibling file then swap it in so readers never see half a file
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        with self.locked():
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._file_path)

    @staticmethod
    def next_id(records: list[dict], key: str = "id") -> int:
        return max((r[key] for r in records), default=0) + 1

    def _ensure_file(self) -> None:
        with self.locked():
            if not self._file_path.exists():
                self._file_path.write_text("[]", encoding="utf-8")
