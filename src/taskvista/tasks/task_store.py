# tasks/task_store.py

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from ..core.errors import PersistenceError, ValidationError
from ..core.ports import Clock, KeyValueStorage
from ..storage.local_storage import StorageError
from .task_models import Task, TaskStats, TaskTag
from .task_seed import build_seed_tasks

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "taskVista_tasks"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    In-memory task collection persisted to a single key-value slot.

    Every mutation is written through to storage right away. A failed write
    raises PersistenceError but never rolls the mutation back: the in-memory
    list is the source of truth for the rest of the session.

    Construction restores from the slot:
    - slot missing/empty -> seed tasks, persisted immediately
    - slot corrupt       -> empty collection, error kept in `restore_error`
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Clock | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock: Clock = clock or _utc_now
        self._tasks: list[Task] = []
        self._last_issued_id = 0
        self.restore_error: PersistenceError | None = None

        try:
            self.restore()
        except PersistenceError as e:
            self.restore_error = e
            logger.warning("TaskStore restore failed key=%s: %s", self._key, e)
        logger.info("TaskStore ready key=%s total=%s", self._key, len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    def close(self) -> None:
        """Release the storage area (shutdown hook)."""
        self._storage.close()

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _now(self) -> datetime:
        # Millisecond precision, same as the persisted createdAt.
        now = self._clock()
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    def _next_id(self, now: datetime) -> int:
        candidate = round(now.timestamp() * 1000)
        floor = max((t.id for t in self._tasks), default=0)
        task_id = max(candidate, floor + 1, self._last_issued_id + 1)
        self._last_issued_id = task_id
        return task_id

    def _save(self, result: Any) -> Any:
        """Persist after a mutation; attach the mutation's result on failure."""
        try:
            self.persist()
        except PersistenceError as e:
            e.result = result
            raise
        return result

    @staticmethod
    def _decode(raw: str) -> list[Task]:
        try:
            data = json.loads(raw)
        except RecursionError:
            raise ValueError("task payload is nested too deeply") from None
        if not isinstance(data, list):
            raise ValueError(f"expected a list of tasks, got {type(data).__name__}")
        tasks = [Task.from_record(rec) for rec in data]
        seen: set[int] = set()
        for t in tasks:
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id}")
            seen.add(t.id)
        return tasks

    # ---- persistence ----

    def persist(self) -> None:
        payload = json.dumps(
            [t.to_record() for t in self._tasks],
            ensure_ascii=False,
            separators=(",", ":"),
        )
        try:
            self._storage.set_item(self._key, payload)
        except StorageError as e:
            logger.warning("Failed to save tasks key=%s: %s", self._key, e)
            raise PersistenceError(f"Error saving tasks: {e}") from e

    def restore(self) -> None:
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._tasks = []
            logger.exception("Failed to read tasks key=%s", self._key)
            raise PersistenceError(f"Error loading saved tasks: {e}") from e

        if not raw:
            self._tasks = build_seed_tasks(self._now())
            logger.info("No saved tasks under key=%s; loaded %d seed tasks.", self._key, len(self._tasks))
            self.persist()
            return

        try:
            self._tasks = self._decode(raw)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            self._tasks = []
            logger.exception("Corrupt task payload under key=%s: %s", self._key, e)
            raise PersistenceError(f"Error loading saved tasks: {e}") from e
        logger.debug("Restored %d tasks from key=%s", len(self._tasks), self._key)

    # ---- public API ----

    def create(self, title: str, category: str, tag: TaskTag | str | None) -> Task:
        missing = [
            name
            for name, value in (("title", title), ("category", category))
            if not isinstance(value, str) or not value.strip()
        ]
        parsed_tag = TaskTag.parse(tag)
        if parsed_tag is None:
            missing.append("tag")
        if missing:
            raise ValidationError(
                f"Please fill in all fields (invalid: {', '.join(missing)})",
                fields=missing,
            )

        now = self._now()
        task = Task(
            id=self._next_id(now),
            title=title,
            category=category,
            tag=parsed_tag,
            created_at=now,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s category=%s tag=%s", task.id, task.category, task.tag.value)
        return self._save(task)

    def toggle_completion(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        if idx is None:
            return None
        task = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
        self._tasks[idx] = task
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return self._save(task)

    def delete(self, task_id: int) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = before - len(self._tasks)
        logger.debug("Task delete id=%s removed=%d", task_id, removed)
        return self._save(removed)

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        logger.debug("Cleared %d completed tasks", removed)
        return self._save(removed)

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def filtered_view(self, category_filter: str | None = None) -> tuple[Task, ...]:
        """
        Snapshot of tasks, newest first.

        An empty filter returns everything; otherwise the category must match
        exactly (case-sensitive). Equal timestamps keep insertion order.
        """
        if category_filter:
            tasks = [t for t in self._tasks if t.category == category_filter]
        else:
            tasks = list(self._tasks)
        tasks.sort(key=lambda t: t.created_at, reverse=True)
        return tuple(tasks)

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    def categories(self) -> list[str]:
        return sorted({t.category for t in self._tasks})
