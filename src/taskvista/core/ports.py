# src/taskvista/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a Protocol instead of a concrete storage backend.
This keeps storage swappable (SQLite file, in-memory) and makes testing easier.
"""

from datetime import datetime
from typing import Callable, Protocol

Clock = Callable[[], datetime]
# Returns the current time as a timezone-aware datetime.


class KeyValueStorage(Protocol):
    """
    String key -> string value storage area (localStorage-like).

    Implementations raise StorageError (or its QuotaExceededError subclass)
    when the underlying medium fails.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def close(self) -> None: ...
