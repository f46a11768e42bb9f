"""
File Registry

In-memory index from file id to StoredFile metadata. The registry is the
single source of truth for which files exist from the application's point
of view; it never touches file bytes.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from .entities import StoredFile


class ReadWriteLock:
    """
    Many concurrent readers or one exclusive writer.

    Writers are preferred: once a writer is waiting, new readers block so
    uploads and deletes cannot be starved by a stream of downloads.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class FileRegistry:
    """
    Process-local map of file id -> StoredFile guarded by one ReadWriteLock.

    Uploads and deletes take the exclusive path; downloads, listings and
    URL generation take the shared path.
    """

    def __init__(self):
        self._files: Dict[str, StoredFile] = {}
        self._lock = ReadWriteLock()

    def insert(self, stored_file: StoredFile) -> None:
        with self._lock.write_locked():
            self._files[stored_file.id] = stored_file

    def get(self, file_id: str) -> Optional[StoredFile]:
        with self._lock.read_locked():
            return self._files.get(file_id)

    def list_all(self) -> List[StoredFile]:
        """Snapshot of every registered file; ordering is not guaranteed."""
        with self._lock.read_locked():
            return list(self._files.values())

    def remove(self, file_id: str) -> Optional[StoredFile]:
        with self._lock.write_locked():
            return self._files.pop(file_id, None)

    def remove_many(self, file_ids: Iterable[str]) -> List[StoredFile]:
        """Remove every listed id in one exclusive section; unknown ids are skipped."""
        with self._lock.write_locked():
            removed = [self._files.pop(file_id) for file_id in file_ids if file_id in self._files]
        return removed

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._files)

    def __contains__(self, file_id: str) -> bool:
        with self._lock.read_locked():
            return file_id in self._files
