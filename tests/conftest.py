# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from fakes import FakeClock, FlakyStorage
from taskvista.core.state import AppState
from taskvista.tasks.task_store import DEFAULT_STORAGE_KEY, TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskvista-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "local_storage.sqlite3",
        storage_key=DEFAULT_STORAGE_KEY,
        storage_quota_bytes=64 * 1024,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture()
def empty_store(storage: FlakyStorage, clock: FakeClock) -> TaskStore:
    """Store restored from an empty list (not from the seed set)."""
    storage.set_item(DEFAULT_STORAGE_KEY, "[]")
    return TaskStore(storage, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, empty_store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=empty_store)

