from collections.abc import Sequence

from ..core.models import BooleanValue, Habit, HabitValue, NumericValue
from ..grid import GridColumn
from . import ansi

__all__ = ["render_cell", "render_grid", "render_habit_list"]

NAME_WIDTH = 22
CELL_WIDTH = 5


def _pad(text: str, width: int) -> str:
    return text[: width - 1].ljust(width)


def _label(habit: Habit) -> str:
    name = habit.name.lower()
    return f"{name} ({habit.unit})" if habit.unit and habit.type.is_numeric else name


def render_cell(habit: Habit, value: HabitValue | None) -> str:
    match value:
        case BooleanValue(completed=True):
            return ansi.argb(habit.color, "✓".center(CELL_WIDTH))
        case BooleanValue(completed=False):
            return ansi.gray("×".center(CELL_WIDTH))
        case NumericValue():
            return ansi.argb(habit.color, value.display_value.center(CELL_WIDTH))
        case None:
            return ansi.muted("·".center(CELL_WIDTH))


def render_grid(habits: Sequence[Habit], columns: Sequence[GridColumn]) -> str:
    if not habits:
        return "No habits found."
    if not columns:
        return "No dates in view."

    def _head(column: GridColumn, text: str) -> str:
        cell = text.center(CELL_WIDTH)
        return ansi.reverse(cell) if column.is_today else cell

    lines = [
        f"HABITS ({columns[-1].key} .. {columns[0].key})\n",
        " " * NAME_WIDTH + "".join(_head(c, c.date.strftime("%a").lower()) for c in columns),
        " " * NAME_WIDTH + "".join(_head(c, f"{c.date.day:02d}") for c in columns),
        "-" * (NAME_WIDTH + CELL_WIDTH * len(columns)),
    ]
    for row, habit in enumerate(habits):
        name = ansi.argb(habit.color, _pad(_label(habit), NAME_WIDTH))
        cells = "".join(render_cell(habit, c.cells[row].value) for c in columns)
        lines.append(f"{name}{cells}  {ansi.muted(f'[{habit.id}]')}")
    return "\n".join(lines)


def render_habit_list(habits: Sequence[Habit]) -> str:
    if not habits:
        return "No habits found."
    lines = []
    for habit in habits:
        unit = f" {ansi.dim(habit.unit)}" if habit.unit else ""
        lines.append(
            f"{ansi.muted(f'[{habit.id}]')} {ansi.argb(habit.color, habit.name.lower())}"
            f"  {habit.type.display_name}{unit}  {len(habit.entries)} entries"
        )
    return "\n".join(lines)
