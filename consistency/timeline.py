"""Growing window of calendar dates behind the scrollable habit grid.

The window holds every date from ``start_date`` (most future) down to
``end_date`` (most past), newest first. Scroll signals near either edge push
that edge outward by a fixed chunk; the window never shrinks.
"""

import dataclasses
import logging
from datetime import date, timedelta

from . import config
from .core.models import DateKey, date_key
from .lib import clock

__all__ = [
    "TimelineWindow",
    "WindowChange",
    "WindowSettings",
    "date_range",
]

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class WindowSettings:
    span_days: int = 365
    chunk_days: int = 30
    future_threshold: int = 10
    past_threshold: int = 20


@dataclasses.dataclass(frozen=True)
class WindowChange:
    added_future: int = 0
    added_past: int = 0

    @property
    def grew(self) -> bool:
        return bool(self.added_future or self.added_past)


def date_range(start: date, end: date) -> list[date]:
    """Every date from start down to end, inclusive."""
    days = (start - end).days
    return [start - timedelta(days=i) for i in range(days + 1)]


class TimelineWindow:
    def __init__(self, today: date | None = None, settings: WindowSettings | None = None):
        self.today = today if today is not None else clock.today()
        self.settings = settings if settings is not None else config.get_window_settings()
        span = timedelta(days=self.settings.span_days)
        self.start_date = self.today + span
        self.end_date = self.today - span
        self._dates = date_range(self.start_date, self.end_date)

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(self._dates)

    @property
    def date_keys(self) -> list[DateKey]:
        return [date_key(d) for d in self._dates]

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, d: object) -> bool:
        return type(d) is date and self.end_date <= d <= self.start_date

    def index_of(self, d: date) -> int:
        if d not in self:
            return -1
        return (self.start_date - d).days

    def initial_focus_index(self) -> int:
        return max(self.index_of(self.today), 0)

    def on_scroll_position_changed(
        self, visible_index: int, total_count: int | None = None
    ) -> WindowChange:
        """Extend the edges the visible index is close to.

        ``total_count`` is the sequence length the caller rendered; it
        defaults to the current length.
        """
        if total_count is None:
            total_count = len(self._dates)
        chunk = timedelta(days=self.settings.chunk_days)
        added_future = added_past = 0

        if visible_index < self.settings.future_threshold:
            self.start_date += chunk
            added_future = self.settings.chunk_days
        if total_count - visible_index < self.settings.past_threshold:
            self.end_date -= chunk
            added_past = self.settings.chunk_days

        change = WindowChange(added_future, added_past)
        if change.grew:
            self._dates = date_range(self.start_date, self.end_date)
            logger.debug(
                "window grew +%d/-%d days to %s..%s (%d dates)",
                added_future,
                added_past,
                self.end_date,
                self.start_date,
                len(self._dates),
            )
        return change
