# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKBOARD_DATA_DIR": "Local directory for taskboard.log (default: .local/taskboard).",
    # Sync
    "TASKBOARD_POLL_INTERVAL_MS": "List refresh interval in milliseconds (default: 1000).",
    "TASKBOARD_POLLING_ENABLED": "Run the background poller (true/false, default: true).",
    "TASKBOARD_PAGE_SIZE": "Infinite-scroll page size, 1..100 (default: 10).",
    "TASKBOARD_INFINITE_SCROLL": "Start the console in infinite-scroll view (true/false).",
}
