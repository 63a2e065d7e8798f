# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from taskvista.config import DEFAULT_STORAGE_QUOTA_BYTES, Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "TASKVISTA_APP_NAME",
        "TASKVISTA_LOG_LEVEL",
        "TASKVISTA_DATA_DIR",
        "TASKVISTA_STORAGE_PATH",
        "TASKVISTA_STORAGE_KEY",
        "TASKVISTA_STORAGE_QUOTA_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "taskvista"
    assert s.log_level == "WARNING"
    assert s.data_dir == Path(".local/taskvista")
    assert s.storage_path == Path(".local/taskvista/local_storage.sqlite3")
    assert s.storage_key == "taskVista_tasks"
    assert s.storage_quota_bytes == DEFAULT_STORAGE_QUOTA_BYTES


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKVISTA_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKVISTA_STORAGE_PATH", raising=False)
    monkeypatch.setenv("TASKVISTA_STORAGE_KEY", "my_tasks")
    monkeypatch.setenv("TASKVISTA_STORAGE_QUOTA_BYTES", "1024")

    s = Settings.from_env()

    assert s.storage_path == tmp_path / "local_storage.sqlite3"
    assert s.storage_key == "my_tasks"
    assert s.storage_quota_bytes == 1024


def test_settings_bad_quota_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("TASKVISTA_STORAGE_QUOTA_BYTES", "lots")
    assert Settings.from_env().storage_quota_bytes == DEFAULT_STORAGE_QUOTA_BYTES

    monkeypatch.setenv("TASKVISTA_STORAGE_QUOTA_BYTES", "-5")
    assert Settings.from_env().storage_quota_bytes == DEFAULT_STORAGE_QUOTA_BYTES
