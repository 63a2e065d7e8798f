# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.

Every variable is optional.
"""

ENV_VARS = {
    # App / logging
    "TASKVISTA_APP_NAME": "App display name (default: taskvista).",
    "TASKVISTA_LOG_LEVEL": "Console logging level; the log file always gets DEBUG (default: WARNING).",
    # Paths (gitignored)
    "TASKVISTA_DATA_DIR": "Local data directory, also holds taskvista.log (default: .local/taskvista).",
    "TASKVISTA_STORAGE_PATH": (
        "SQLite key-value storage file (default: <data_dir>/local_storage.sqlite3)."
    ),
    # Persistence slot
    "TASKVISTA_STORAGE_KEY": "Key of the slot holding the task list (default: taskVista_tasks).",
    "TASKVISTA_STORAGE_QUOTA_BYTES": "Storage area quota in bytes (default: 5242880).",
}
