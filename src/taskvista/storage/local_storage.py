# src/taskvista/storage/local_storage.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class StorageError(Exception):
    """The storage area could not be read or written."""


class QuotaExceededError(StorageError):
    """A write would push the storage area past its quota."""


def _item_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class LocalStorage:
    """
    SQLite-backed key-value storage area (string keys, string values).

    Mirrors the browser's localStorage:
    - get_item returns None for a missing key
    - set_item replaces the value and enforces a total size quota
    - remove_item is a no-op for a missing key

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path, *, quota_bytes: int | None = DEFAULT_QUOTA_BYTES) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes
        self._ensure_schema()
        logger.info("LocalStorage ready db=%s quota=%s", self._db_path, quota_bytes)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"cannot open storage {self._db_path}: {e}") from e
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"cannot initialize storage {self._db_path}: {e}") from e
        finally:
            conn.close()

    # ---- public API ----

    def get_item(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read key {key!r}: {e}") from e
        return None if row is None else str(row[0])

    def set_item(self, key: str, value: str) -> None:
        try:
            conn = self._get_conn()
            try:
                if self._quota_bytes is not None:
                    (used,) = conn.execute(
                        """
                        SELECT COALESCE(SUM(LENGTH(CAST(key AS BLOB)) + LENGTH(CAST(value AS BLOB))), 0)
                        FROM kv
                        WHERE key != ?
                        """,
                        (key,),
                    ).fetchone()
                    needed = int(used) + _item_size(key, value)
                    if needed > self._quota_bytes:
                        raise QuotaExceededError(
                            f"setting {key!r} needs {needed} bytes, quota is {self._quota_bytes}"
                        )
                conn.execute(
                    "INSERT INTO kv(key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to write key {key!r}: {e}") from e
        logger.debug("LocalStorage set key=%s bytes=%d", key, len(value.encode("utf-8")))

    def remove_item(self, key: str) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to remove key {key!r}: {e}") from e


class MemoryStorage:
    """Dict-backed storage area with the same semantics as LocalStorage."""

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def close(self) -> None:
        return

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(_item_size(k, v) for k, v in self._items.items() if k != key)
            needed = used + _item_size(key, value)
            if needed > self._quota_bytes:
                raise QuotaExceededError(
                    f"setting {key!r} needs {needed} bytes, quota is {self._quota_bytes}"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
