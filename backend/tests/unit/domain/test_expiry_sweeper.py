"""
Unit tests for the local upload expiry sweeper.
"""

import os
import time

import pytest

from quickscan.domain.file_storage import ExpirySweeper, StorageType

HOUR = 3600


@pytest.fixture
def now():
    # Whole seconds so mtimes round-trip exactly through os.utime
    return float(int(time.time()))


def write_file(directory, name, age_seconds, now):
    path = directory / name
    path.write_bytes(b"data")
    mtime = now - age_seconds
    os.utime(path, (mtime, mtime))
    return path


class TestExpirySweeper:
    def test_deletes_only_files_older_than_cutoff(self, tmp_path, now):
        old = write_file(tmp_path, "old.txt", 25 * HOUR, now)
        older = write_file(tmp_path, "older.txt", 48 * HOUR, now)
        fresh = write_file(tmp_path, "fresh.txt", 23 * HOUR, now)

        sweeper = ExpirySweeper(StorageType.TEMPORARY, tmp_path, clock=lambda: now)

        assert sweeper.sweep(24) == 2
        assert not old.exists()
        assert not older.exists()
        assert fresh.exists()

    def test_file_exactly_at_cutoff_is_kept(self, tmp_path, now):
        boundary = write_file(tmp_path, "boundary.txt", 24 * HOUR, now)

        sweeper = ExpirySweeper(StorageType.TEMPORARY, tmp_path, clock=lambda: now)

        assert sweeper.sweep(24) == 0
        assert boundary.exists()

    def test_subdirectories_are_ignored(self, tmp_path, now):
        nested = tmp_path / "nested"
        nested.mkdir()
        os.utime(nested, (now - 48 * HOUR, now - 48 * HOUR))

        sweeper = ExpirySweeper(StorageType.TEMPORARY, tmp_path, clock=lambda: now)

        assert sweeper.sweep(24) == 0
        assert nested.is_dir()

    def test_non_local_backend_is_a_no_op(self, tmp_path, now):
        old = write_file(tmp_path, "old.txt", 48 * HOUR, now)

        sweeper = ExpirySweeper(StorageType.SUPABASE, tmp_path, clock=lambda: now)

        assert sweeper.sweep(24) == 0
        assert old.exists()

    def test_missing_directory_returns_zero(self, tmp_path):
        sweeper = ExpirySweeper(StorageType.TEMPORARY, tmp_path / "missing")

        assert sweeper.sweep(24) == 0
