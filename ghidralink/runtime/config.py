"""Optional JSON config for the link bridge.

Holds listener port/host and hex-view preferences. Missing, unreadable or
malformed config falls back to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..hexview import DEFAULT_STYLE
from .listener import DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)

APP_NAME = "ghidralink"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_HEXVIEW_ROWS = 16
MAX_HEXVIEW_ROWS = 256


@dataclass(frozen=True)
class BridgeConfig:
    """Effective settings after sanitizing the config file."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    hexview_rows: int = DEFAULT_HEXVIEW_ROWS
    style: str = DEFAULT_STYLE


def load_config() -> dict[str, object]:
    """Load the raw config object, or ``{}`` when absent or not a JSON object."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config as pretty-printed JSON; write errors are logged only."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _int_in_range(value: object, low: int, high: int, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < low or value > high:
        return default
    return value


def _non_empty_str(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_bridge_config() -> BridgeConfig:
    """Return sanitized settings from the config file."""
    data = load_config()
    return BridgeConfig(
        port=_int_in_range(data.get("port"), 0, 65535, DEFAULT_PORT),
        host=_non_empty_str(data.get("host"), DEFAULT_HOST),
        hexview_rows=_int_in_range(data.get("hexview_rows"), 1, MAX_HEXVIEW_ROWS, DEFAULT_HEXVIEW_ROWS),
        style=_non_empty_str(data.get("style"), DEFAULT_STYLE),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "BridgeConfig",
    "load_config",
    "save_config",
    "load_bridge_config",
]
