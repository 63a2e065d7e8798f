# src/taskvista/core/errors.py

"""
Exceptions raised by the task core.

Both kinds are recoverable: the view catches them at the command boundary
and turns them into a user-visible message.
"""

from __future__ import annotations

from typing import Any


class TaskVistaError(Exception):
    """Base class for task core errors."""


class ValidationError(TaskVistaError, ValueError):
    """A required field is missing/empty or the tag is not a known tier."""

    def __init__(self, message: str, *, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields: list[str] = list(fields or [])


class PersistenceError(TaskVistaError):
    """
    Reading or writing the persistence slot failed.

    The in-memory collection stays authoritative. When raised by a mutating
    operation, `result` holds the value the operation would have returned.
    """

    def __init__(self, message: str, *, result: Any = None) -> None:
        super().__init__(message)
        self.result = result
