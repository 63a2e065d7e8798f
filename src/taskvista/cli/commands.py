# src/taskvista/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..core.errors import PersistenceError, ValidationError
from ..core.state import AppState
from .render import clean_text, render_board, render_stats

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

SAVE_WARNING = "Error saving tasks. Please check your storage."
ADD_USAGE = "Usage: /add <title> | <category> | <tag>   (tag: high/red, medium/green, low/blue)"


class CommandRegistry:
    """Simple slash-command registry used by the console view (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Arguments reach the handler as the raw remainder of the line, so task
        titles keep their spacing.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(raw: str) -> int | None:
    raw = raw.strip().lstrip("#")
    try:
        return int(raw)
    except ValueError:
        return None


def _mutate(op: Callable[[], Any]) -> tuple[Any, str | None]:
    """Run a store mutation; a failed write still yields the result plus a warning."""
    try:
        return op(), None
    except PersistenceError as e:
        logger.warning("Mutation applied but not saved: %s", e)
        return e.result, SAVE_WARNING


def _reply(state: AppState, message: str, warning: str | None = None) -> str:
    lines = [message]
    if warning:
        lines.append(f"[WARN] {warning}")
    lines.append(render_board(state.task_store, state.current_filter))
    return "\n".join(lines)


def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, rest: str) -> str:
    """
    /add Write report | Work | high
    """
    # Category and tag never contain "|"; anything left of them is the title.
    fields = [p.strip() for p in rest.rsplit("|", 2)]
    if len(fields) != 3:
        return f"Please fill in all fields (separate title, category and tag with '|').\n{ADD_USAGE}"
    title, category, tag = fields

    try:
        task, warning = _mutate(lambda: state.task_store.create(title, category, tag))
    except ValidationError as e:
        return f"Please fill in all fields (missing or invalid: {', '.join(e.fields)}).\n{ADD_USAGE}"

    return _reply(state, f"Task added successfully! (#{task.id})", warning)


def cmd_done(state: AppState, rest: str) -> str:
    task_id = _parse_id(rest)
    if task_id is None:
        return "Usage: /done <id>"

    task, warning = _mutate(lambda: state.task_store.toggle_completion(task_id))
    if task is None:
        return f"No task #{task_id}. Use /list to see task ids."

    status = "complete" if task.completed else "incomplete"
    return _reply(state, f"Task #{task.id} marked {status}.", warning)


def cmd_delete(state: AppState, rest: str) -> str:
    task_id = _parse_id(rest)
    if task_id is None:
        return "Usage: /del <id>"

    removed, warning = _mutate(lambda: state.task_store.delete(task_id))
    message = "Task deleted successfully!" if removed else f"No task #{task_id}; nothing deleted."
    return _reply(state, message, warning)


def cmd_clear(state: AppState, rest: str) -> str:
    removed, warning = _mutate(state.task_store.clear_completed)
    return _reply(state, f"{removed} completed task(s) cleared!", warning)


def cmd_filter(state: AppState, rest: str) -> str:
    """
    /filter Work  -> show only the Work category (exact, case-sensitive)
    /filter       -> show all categories
    """
    state.current_filter = rest.strip()
    if state.current_filter:
        message = f"Filter set to category {clean_text(state.current_filter)!r}."
    else:
        message = "Filter cleared."
    return _reply(state, message)


def cmd_list(state: AppState, rest: str) -> str:
    return render_board(state.task_store, state.current_filter)


def cmd_stats(state: AppState, rest: str) -> str:
    return render_stats(state.task_store.stats())


def cmd_cats(state: AppState, rest: str) -> str:
    cats = state.task_store.categories()
    if not cats:
        return "No categories yet."
    lines = ["Categories:"]
    for cat in cats:
        count = len(state.task_store.filtered_view(cat))
        lines.append(f"  {clean_text(cat)} ({count})")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <category> | <tag>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle", "t"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["delete", "rm"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("filter", cmd_filter, help_text="Filter by category: /filter <category> | /filter.")
registry.register("list", cmd_list, help_text="Show tasks (newest first).", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counts.")
registry.register("cats", cmd_cats, help_text="List categories.")
