# src/taskvista/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in commands.
    settings: object

    task_store: TaskStore

    # View-side state: the store never sees it except as a filtered_view() argument.
    current_filter: str = ""
