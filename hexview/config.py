"""Read-only JSON config helpers.

Supplies the default highlight style and optional debug logging settings.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "hexview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_style_name() -> str | None:
    """Load configured Pygments style name, ``None`` when unset/invalid."""
    return _load_string("style")


def load_log_file() -> Path | None:
    """Load configured debug log path, expanding ``~``."""
    value = _load_string("log_file")
    return Path(value).expanduser() if value is not None else None


def load_log_level() -> int:
    """Return the configured logging level, ``INFO`` when unset or unknown."""
    value = _load_string("log_level")
    if value is None or value.upper() not in _LOG_LEVELS:
        return logging.INFO
    return getattr(logging, value.upper())
