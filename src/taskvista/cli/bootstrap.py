# src/taskvista/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage area and the task store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.local_storage import LocalStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings(); if storage is None, opens LocalStorage at settings.storage_path.
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = LocalStorage(settings.storage_path, quota_bytes=settings.storage_quota_bytes)

    task_store = TaskStore(storage, key=settings.storage_key)
    if task_store.restore_error is not None:
        logger.warning("Starting with an empty task list: %s", task_store.restore_error)

    return AppState(settings=settings, task_store=task_store)
