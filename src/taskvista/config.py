# src/taskvista/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Components get settings injected; only the CLI calls get_settings().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .storage.local_storage import DEFAULT_QUOTA_BYTES as DEFAULT_STORAGE_QUOTA_BYTES
from .tasks.task_store import DEFAULT_STORAGE_KEY

ENV_PREFIX = "TASKVISTA"

# Real environment variables win over .env entries.
load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path

    # ---- Persistence slot ----
    storage_key: str
    storage_quota_bytes: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskvista").strip() or "taskvista"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskvista"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "local_storage.sqlite3")

        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        storage_quota_bytes = _env_int(_k("STORAGE_QUOTA_BYTES"), DEFAULT_STORAGE_QUOTA_BYTES)
        if storage_quota_bytes <= 0:
            storage_quota_bytes = DEFAULT_STORAGE_QUOTA_BYTES

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            storage_quota_bytes=storage_quota_bytes,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
