# tests/fakes.py

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

from taskvista.storage.local_storage import MemoryStorage, StorageError
from taskvista.tasks.task_store import DEFAULT_STORAGE_KEY

START = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """
    Deterministic clock for unit tests.

    Returns the same instant until advance() is called.
    """

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class FlakyStorage(MemoryStorage):
    """
    MemoryStorage whose reads/writes can be switched to fail.

    Counts writes so tests can assert that an operation persisted.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("disk unavailable")
        return super().get_item(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full")
        self.writes += 1
        super().set_item(key, value)


def record(
    id: int,
    *,
    title: str = "Task",
    category: str = "Work",
    tag: str = "red",
    completed: bool = False,
    created_at: str = "2024-05-01T10:00:00.000Z",
) -> dict:
    """One persisted task record in the slot's wire format."""
    return {
        "id": id,
        "title": title,
        "category": category,
        "tag": tag,
        "completed": completed,
        "createdAt": created_at,
    }


def write_records(storage, records: list[dict], key: str = DEFAULT_STORAGE_KEY) -> None:
    storage.set_item(key, json.dumps(records))
