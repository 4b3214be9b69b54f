import re
from collections.abc import Callable
from dataclasses import dataclass

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Theme:
    gray: str = "\033[38;5;245m"
    muted: str = "\033[90m"  # dim gray for unset cells and ids
    dim: str = "\033[2m"
    reverse: str = "\033[7m"
    reset: str = "\033[0m"


DEFAULT = Theme()
PLAIN = Theme(gray="", muted="", dim="", reverse="", reset="")
_active: Theme = DEFAULT


def use(theme: Theme) -> None:
    global _active
    _active = theme


_COLORS = {"gray", "muted"}


def __getattr__(name: str) -> Callable[[str], str]:
    if name in _COLORS:

        def _wrap(text: str) -> str:
            return f"{getattr(_active, name)}{text}{_active.reset}"

        _wrap.__name__ = name
        return _wrap
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def dim(text: str) -> str:
    return f"{_active.dim}{text}{_active.reset}"


def reverse(text: str) -> str:
    return f"{_active.reverse}{text}{_active.reset}"


def argb(color: int, text: str) -> str:
    """Color text with a 0xAARRGGBB value as a 24-bit foreground."""
    if not _active.reset:
        return text
    r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
    return f"\033[38;2;{r};{g};{b}m{text}{_active.reset}"


def strip(text: str) -> str:
    return _ANSI_RE.sub("", text)
