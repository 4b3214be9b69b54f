import logging
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from .timeline import WindowSettings

CONSISTENCY_DIR = Path.home() / ".consistency"
CONFIG_PATH = CONSISTENCY_DIR / "config.yaml"

WINDOW_KEYS = ("span_days", "chunk_days", "future_threshold", "past_threshold")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, e)
            data = None
        self._data = data if isinstance(data, dict) else {}

    def _save(self) -> None:
        """Persist config to disk."""
        CONSISTENCY_DIR.mkdir(parents=True, exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


_config = Config()


def _positive_int(key: str, default: int) -> int:
    val = _config.get(key)
    if val is None:
        return default
    if isinstance(val, int) and not isinstance(val, bool) and val > 0:
        return val
    logger.warning("config %s=%r is not a positive integer, using %d", key, val, default)
    return default


def get_window_settings() -> "WindowSettings":
    """Window span, growth chunk and edge thresholds, falling back to defaults."""
    from .timeline import WindowSettings

    defaults = WindowSettings()
    return WindowSettings(**{key: _positive_int(key, getattr(defaults, key)) for key in WINDOW_KEYS})


def get_log_level() -> str:
    val = _config.get("log_level")
    level = str(val).strip().upper() if val else "WARNING"
    return level if level in LOG_LEVELS else "WARNING"


def get_value(key: str) -> object:
    return _config.get(key)


def set_value(key: str, value: object) -> None:
    _config.set(key, value)
