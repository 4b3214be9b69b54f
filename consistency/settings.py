import yaml
from fncli import cli

from . import config
from .core.errors import ValidationError
from .lib.errors import echo

KNOWN_KEYS = (*config.WINDOW_KEYS, "log_level")


def _check_key(key: str) -> None:
    if key not in KNOWN_KEYS:
        raise ValidationError(f"unknown config key '{key}' ({', '.join(KNOWN_KEYS)})")


@cli("consistency config", name="get")
def get(key: str):
    """Show a config value"""
    _check_key(key)
    val = config.get_value(key)
    echo(f"{key}: {'(default)' if val is None else val}")


@cli("consistency config", name="set")
def set_(key: str, value: str):
    """Set a config value"""
    _check_key(key)
    parsed = yaml.safe_load(value)
    if key in config.WINDOW_KEYS and (
        not isinstance(parsed, int) or isinstance(parsed, bool) or parsed <= 0
    ):
        raise ValidationError(f"{key} must be a positive integer")
    if key == "log_level" and str(parsed).upper() not in config.LOG_LEVELS:
        raise ValidationError(f"log_level must be one of {', '.join(config.LOG_LEVELS)}")
    config.set_value(key, parsed)
    echo(f"{key}: {parsed}")
