# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "App display name (default: taskpad).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKPAD_DATA_DIR": "Local data directory for the database and taskpad.log (default: .local/taskpad).",
    "TASKPAD_DB_PATH": "SQLite key-value store path (default: <data_dir>/tasks.sqlite3).",
    "TASKPAD_STORAGE_KEY": "Key holding the task list inside the store (default: tasks).",
    # Notices
    "TASKPAD_ERROR_NOTICE_MS": "How long error notices stay active (default: 4000).",
    "TASKPAD_SUCCESS_NOTICE_MS": "How long success notices stay active (default: 3000).",
    # Console
    "TASKPAD_CONFIRM_DESTRUCTIVE": "Ask before /delete and /clear (true/false, default: true).",
}
