import dataclasses
from collections.abc import Sequence
from datetime import date

from .core.models import DateKey, Habit, HabitValue, date_key
from .timeline import TimelineWindow

__all__ = ["GridCell", "GridColumn", "snapshot"]


@dataclasses.dataclass(frozen=True)
class GridCell:
    habit: Habit
    value: HabitValue | None

    @property
    def is_set(self) -> bool:
        return self.value is not None


@dataclasses.dataclass(frozen=True)
class GridColumn:
    date: date
    key: DateKey
    is_today: bool
    cells: tuple[GridCell, ...]


def snapshot(
    habits: Sequence[Habit],
    window: TimelineWindow,
    start: int = 0,
    count: int | None = None,
) -> list[GridColumn]:
    """Columns for ``window.dates[start:start + count]``, one cell per habit.

    An unset cell carries ``None``, which is not the same as an unchecked
    boolean.
    """
    start = max(start, 0)
    dates = window.dates[start:] if count is None else window.dates[start : start + count]
    columns = []
    for d in dates:
        key = date_key(d)
        cells = tuple(GridCell(habit, habit.entries.get(key)) for habit in habits)
        columns.append(GridColumn(date=d, key=key, is_today=d == window.today, cells=cells))
    return columns
