"""Persistent JSON config helpers.

Stores default listing preferences (hidden files, ignore-file processing,
extra ignore patterns, theme). The file is only read; values with the wrong
type are ignored and a missing or malformed file behaves as empty.
Each accessor takes an already-loaded dict so callers can read the file once.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lstree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _source(data: dict[str, object] | None) -> dict[str, object]:
    return load_config() if data is None else data


def _load_bool(key: str, default: bool, data: dict[str, object] | None = None) -> bool:
    value = _source(data).get(key)
    return value if isinstance(value, bool) else default


def load_show_hidden(data: dict[str, object] | None = None) -> bool:
    """Return persisted hidden-file visibility preference (default ``False``)."""
    return _load_bool("show_hidden", False, data)


def load_use_gitignore(data: dict[str, object] | None = None) -> bool:
    """Return whether ``.gitignore`` processing is enabled by default."""
    return _load_bool("gitignore", True, data)


def load_ignore_patterns(data: dict[str, object] | None = None) -> str | None:
    """Load the default pipe-delimited ignore string, ``None`` when unset/blank."""
    value = _source(data).get("ignore")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = _source(data).get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "load_ignore_patterns",
    "load_show_hidden",
    "load_theme_name",
    "load_use_gitignore",
]
