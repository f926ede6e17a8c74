# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/listkeeper/config.py for parsing rules and defaults.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "LISTKEEPER_APP_NAME": "App display name (default: listkeeper).",
    "LISTKEEPER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Persistence
    "LISTKEEPER_SAVE_TASKS": "Load tasks on startup and save after every change (true/false, default: true).",
    "LISTKEEPER_SAVE_RETRIES": "Extra attempts after a failed save (default: 2).",
    "LISTKEEPER_SAVE_RETRY_DELAY_MS": "Delay between save attempts in milliseconds (default: 200).",
    # Paths (gitignored)
    "LISTKEEPER_DATA_DIR": "Local data directory, also holds listkeeper.log (default: .local/listkeeper).",
    "LISTKEEPER_TASKS_PATH": "Task file path (default: <data_dir>/tasks.json).",
}
