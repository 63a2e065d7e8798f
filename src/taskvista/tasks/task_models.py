# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TaskTag(StrEnum):
    """
    Priority tier of a task.

    Stored by color (the persisted wire values), shown by priority.
    """

    RED = "red"
    GREEN = "green"
    BLUE = "blue"

    @property
    def priority(self) -> str:
        return _PRIORITY_BY_TAG[self]

    @property
    def label(self) -> str:
        return f"{self.priority.capitalize()} Priority"

    @classmethod
    def parse(cls, raw: TaskTag | str | None) -> TaskTag | None:
        """Accept a member, a color name or a priority name; None if unknown."""
        if isinstance(raw, cls):
            return raw
        if not raw or not isinstance(raw, str):
            return None
        key = raw.strip().lower()
        try:
            return cls(key)
        except ValueError:
            return _TAG_BY_PRIORITY.get(key)


_PRIORITY_BY_TAG: dict[TaskTag, str] = {
    TaskTag.RED: "high",
    TaskTag.GREEN: "medium",
    TaskTag.BLUE: "low",
}
_TAG_BY_PRIORITY: dict[str, TaskTag] = {v: k for k, v in _PRIORITY_BY_TAG.items()}


def format_timestamp(dt: datetime) -> str:
    """UTC, millisecond precision, 'Z' suffix: 2024-05-01T10:00:00.000Z"""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    try:
        return dt.astimezone(UTC)
    except OverflowError:
        # e.g. 0001-01-01T00:00:00+01:00 lands before datetime.min in UTC
        raise ValueError(f"timestamp out of range: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    category: str
    tag: TaskTag
    created_at: datetime
    completed: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "tag": self.tag.value,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_record(cls, rec: Any) -> Task:
        """
        Build a Task from one persisted record.

        Raises ValueError for anything that does not look like a record
        written by TaskStore.persist().
        """
        if not isinstance(rec, dict):
            raise ValueError(f"task record must be an object, got {type(rec).__name__}")

        raw_id = rec.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int | float):
            raise ValueError(f"invalid id: {raw_id!r}")
        if isinstance(raw_id, float) and not raw_id.is_integer():
            raise ValueError(f"invalid id: {raw_id!r}")

        title = rec.get("title")
        category = rec.get("category")
        for name, value in (("title", title), ("category", category)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"invalid {name}: {value!r}")

        raw_tag = rec.get("tag")
        if not isinstance(raw_tag, str):
            raise ValueError(f"invalid tag: {raw_tag!r}")
        try:
            tag = TaskTag(raw_tag)
        except ValueError:
            raise ValueError(f"unknown tag: {raw_tag!r}") from None

        completed = rec.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag: {completed!r}")

        raw_created = rec.get("createdAt")
        if not isinstance(raw_created, str):
            raise ValueError(f"invalid createdAt: {raw_created!r}")
        created_at = parse_timestamp(raw_created)

        return cls(
            id=int(raw_id),
            title=title,
            category=category,
            tag=tag,
            created_at=created_at,
            completed=completed,
        )


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int
