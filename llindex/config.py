"""Persistent JSON config helpers.

Stores the highlight style, snapshot-cache size, and outline detail width.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .index.cache import DEFAULT_CACHE_MAX_ENTRIES
from .index.outline import DEFAULT_DETAIL_WIDTH

APP_NAME = "llindex"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks a query.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_positive_int(key: str, default: int) -> int:
    """Read a strictly positive integer; booleans and other types are ignored."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_style() -> str:
    """Load the Pygments style name, defaulting to ``monokai``."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def load_cache_max_entries() -> int:
    return _load_positive_int("cache_max_entries", DEFAULT_CACHE_MAX_ENTRIES)


def load_outline_detail_width() -> int:
    return _load_positive_int("outline_detail_width", DEFAULT_DETAIL_WIDTH)
