# src/taskvista/cli/render.py

from __future__ import annotations

import re
from collections.abc import Iterable

from ..tasks.task_models import Task, TaskStats
from ..tasks.task_store import TaskStore

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

DONE_MARK = "✓"
OPEN_MARK = "○"


def clean_text(text: str) -> str:
    """Neutralize control characters (newlines, ANSI escapes) in user text."""
    return _CONTROL_CHARS.sub(" ", text)


def render_task(task: Task) -> str:
    mark = DONE_MARK if task.completed else OPEN_MARK
    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    return (
        f"  [{mark}] #{task.id}  {clean_text(task.title)}"
        f"  ({clean_text(task.category)} · {task.tag.label} · {created})"
    )


def render_stats(stats: TaskStats) -> str:
    return f"Total: {stats.total} | Completed: {stats.completed} | Pending: {stats.pending}"


def render_tasks(tasks: Iterable[Task], *, has_any: bool, category_filter: str = "") -> str:
    lines = [render_task(t) for t in tasks]
    if lines:
        return "\n".join(lines)
    if not has_any:
        return "  No tasks yet. Add one with /add <title> | <category> | <tag>"
    return f"  No tasks found for the selected category ({clean_text(category_filter)})."


def render_board(store: TaskStore, category_filter: str = "") -> str:
    """Full re-render: header, filter line, stats, task list (newest first)."""
    tasks = store.filtered_view(category_filter)
    stats = store.stats()
    shown = f"category = {clean_text(category_filter)}" if category_filter else "all categories"
    return "\n".join(
        [
            f"Tasks ({shown})",
            render_stats(stats),
            render_tasks(tasks, has_any=stats.total > 0, category_filter=category_filter),
        ]
    )
