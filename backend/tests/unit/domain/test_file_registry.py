"""
Unit tests for the in-memory file registry and its reader/writer lock.
"""

import threading
import time

import pytest

from quickscan.domain.file_storage import FileRegistry, ReadWriteLock, StorageType, StoredFile


def make_file(file_id: str, storage_type: StorageType = StorageType.TEMPORARY) -> StoredFile:
    return StoredFile(
        id=file_id,
        filename=f"{file_id}.txt",
        file_size=3,
        content_type="text/plain",
        storage_path=f"/tmp/{file_id}.txt",
        storage_type=storage_type,
        timestamp=StoredFile.now(),
    )


@pytest.fixture
def registry():
    return FileRegistry()


class TestFileRegistry:
    def test_insert_get_remove(self, registry):
        registry.insert(make_file("a"))

        assert registry.get("a").filename == "a.txt"
        assert "a" in registry
        assert registry.remove("a").id == "a"
        assert registry.get("a") is None
        assert registry.remove("a") is None

    def test_list_all_is_a_snapshot(self, registry):
        registry.insert(make_file("a"))
        snapshot = registry.list_all()

        registry.insert(make_file("b"))

        assert [f.id for f in snapshot] == ["a"]
        assert {f.id for f in registry.list_all()} == {"a", "b"}

    def test_remove_many(self, registry):
        registry.insert(make_file("a"))
        registry.insert(make_file("b", StorageType.SUPABASE))
        registry.insert(make_file("c"))

        removed = registry.remove_many(["a", "c", "missing", "a"])

        assert sorted(f.id for f in removed) == ["a", "c"]
        assert [f.id for f in registry.list_all()] == ["b"]

    def test_concurrent_inserts_and_reads(self, registry):
        def writer(prefix):
            for i in range(50):
                registry.insert(make_file(f"{prefix}-{i}"))

        def reader():
            for _ in range(50):
                registry.list_all()

        threads = [threading.Thread(target=writer, args=(p,)) for p in "abcd"]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 200


class TestReadWriteLock:
    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        inside = []
        both_inside = threading.Event()

        def read():
            with lock.read_locked():
                inside.append(1)
                if len(inside) == 2:
                    both_inside.set()
                both_inside.wait(timeout=2)

        threads = [threading.Thread(target=read) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert both_inside.is_set()

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []

        def write():
            with lock.write_locked():
                events.append("write-start")
                time.sleep(0.05)
                events.append("write-end")

        def read():
            with lock.read_locked():
                events.append("read")

        writer = threading.Thread(target=write)
        writer.start()
        while not events:
            time.sleep(0.001)
        reader = threading.Thread(target=read)
        reader.start()
        writer.join()
        reader.join()

        assert events == ["write-start", "write-end", "read"]
