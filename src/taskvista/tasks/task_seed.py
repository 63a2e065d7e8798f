# src/taskvista/tasks/task_seed.py

from __future__ import annotations

from datetime import datetime, timedelta

from .task_models import Task, TaskTag

# (title, category, tag, completed, age)
SEED_TASKS: tuple[tuple[str, str, TaskTag, bool, timedelta], ...] = (
    ("Complete project proposal", "Work", TaskTag.RED, False, timedelta(hours=24)),
    ("Study JavaScript fundamentals", "Study", TaskTag.GREEN, True, timedelta(hours=12)),
    ("Go for a walk", "Health", TaskTag.BLUE, False, timedelta(hours=6)),
)


def build_seed_tasks(now: datetime) -> list[Task]:
    """
    Default tasks for a first run with no persisted data.

    Ids are now-in-milliseconds minus 3, 2, 1 so that the next task created
    in the same session still gets a larger id.
    """
    now_ms = round(now.timestamp() * 1000)
    count = len(SEED_TASKS)
    return [
        Task(
            id=now_ms - (count - i),
            title=title,
            category=category,
            tag=tag,
            created_at=now - age,
            completed=completed,
        )
        for i, (title, category, tag, completed, age) in enumerate(SEED_TASKS)
    ]
