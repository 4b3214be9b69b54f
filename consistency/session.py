"""Line-oriented front end over one habit store and one timeline window.

A session plays the part of the grid UI: each command is a tap, a value
entry or a scroll, applied to the core, and ``grid`` renders the columns
starting at the current focus index.
"""

import shlex
import sys
from collections.abc import Callable, Iterable

from fncli import cli

from .core.errors import ConsistencyError, NotFoundError, ValidationError
from .core.models import BooleanValue, DateKey, Habit, HabitType, NumericValue
from .grid import snapshot
from .lib import ansi
from .lib.dates import parse_date_key
from .lib.errors import echo, exit_error
from .lib.render import render_grid, render_habit_list
from .store import HabitStore, sample_habits
from .timeline import TimelineWindow
from .values import parse_numeric_input

__all__ = ["Session", "parse_habit_type"]

_TYPE_ALIASES = {
    "bool": HabitType.BOOLEAN,
    "boolean": HabitType.BOOLEAN,
    "yesno": HabitType.BOOLEAN,
    "count": HabitType.WHOLE_NUMBER,
    "whole": HabitType.WHOLE_NUMBER,
    "int": HabitType.WHOLE_NUMBER,
    "decimal": HabitType.DECIMAL,
    "measure": HabitType.DECIMAL,
    "float": HabitType.DECIMAL,
}

HELP = """\
add <bool|count|decimal> <name> [unit]   add a habit
toggle <habit> <date>                    flip a yes/no entry
set <habit> <date> <value>               enter a count or measurement
tap <habit> <date>                       quick completion (+1, +0.1 or toggle)
inc|dec <habit> <date>                   step a numeric entry up or down
scroll <index>                           move the first visible column
today                                    jump back to today
grid [days]                              show the grid from the first visible column
ls                                       list habits
quit                                     end the session"""


def parse_habit_type(text: str) -> HabitType:
    key = text.strip().lower().replace("/", "").replace("-", "").replace("_", "")
    if key in _TYPE_ALIASES:
        return _TYPE_ALIASES[key]
    try:
        return HabitType[text.strip().upper()]
    except KeyError:
        raise ValidationError(f"unknown habit type '{text}' (bool, count or decimal)") from None


def _describe(habit: Habit, key: DateKey) -> str:
    match habit.entries.get(key):
        case BooleanValue(completed=True):
            return f"✓ {habit.name.lower()}  {key}"
        case BooleanValue(completed=False):
            return f"× {habit.name.lower()}  {key}"
        case NumericValue() as value:
            unit = f" {habit.unit}" if habit.unit else ""
            return f"→ {habit.name.lower()}  {key}  {value.display_value}{unit}"
        case None:
            return f"· {habit.name.lower()}  {key}"


class Session:
    def __init__(
        self,
        store: HabitStore | None = None,
        window: TimelineWindow | None = None,
        view_days: int = 7,
    ):
        self.store = store if store is not None else HabitStore()
        self.window = window if window is not None else TimelineWindow()
        self.view_days = view_days
        self.focus = self.window.initial_focus_index()
        self._commands: dict[str, Callable[[list[str]], str]] = {
            "add": self._add,
            "toggle": self._toggle,
            "set": self._set,
            "tap": self._tap,
            "inc": lambda args: self._adjust(args, increment=True),
            "dec": lambda args: self._adjust(args, increment=False),
            "scroll": self._scroll,
            "today": self._today,
            "grid": self._grid,
            "ls": lambda args: render_habit_list(self.store.habits),
            "help": lambda args: HELP,
        }

    # ── parsing ──────────────────────────────────────────────────────────────

    def _require(self, habit_id: str, numeric: bool | None = None) -> Habit:
        habit = self.store.get_habit(habit_id)
        if habit is None:
            raise NotFoundError(f"no habit '{habit_id}'")
        if numeric is True and not habit.type.is_numeric:
            raise ValidationError(f"'{habit.name}' is yes/no, use toggle or tap")
        if numeric is False and habit.type.is_numeric:
            raise ValidationError(f"'{habit.name}' is numeric, use set, inc, dec or tap")
        return habit

    @staticmethod
    def _arity(args: list[str], usage: str, minimum: int, maximum: int | None = None) -> None:
        maximum = minimum if maximum is None else maximum
        if not minimum <= len(args) <= maximum:
            raise ValidationError(f"usage: {usage}")

    # ── commands ─────────────────────────────────────────────────────────────

    def _add(self, args: list[str]) -> str:
        self._arity(args, "add <bool|count|decimal> <name> [unit]", 2, 3)
        habit_type = parse_habit_type(args[0])
        habit = self.store.create_habit(args[1], habit_type, unit=args[2] if len(args) > 2 else "")
        unit = f" ({habit.unit})" if habit.unit and habit.type.is_numeric else ""
        return f"□ {habit.name.lower()}{unit}  {habit.type.display_name}  [{habit.id}]"

    def _toggle(self, args: list[str]) -> str:
        self._arity(args, "toggle <habit> <date>", 2)
        self._require(args[0], numeric=False)
        key = parse_date_key(args[1])
        updated = self.store.toggle_boolean(args[0], key)
        return _describe(updated, key) if updated else ""

    def _set(self, args: list[str]) -> str:
        self._arity(args, "set <habit> <date> <value>", 3)
        habit = self._require(args[0], numeric=True)
        key = parse_date_key(args[1])
        value = parse_numeric_input(habit.type, args[2])
        updated = self.store.set_numeric(args[0], key, value.value)
        return _describe(updated, key) if updated else ""

    def _tap(self, args: list[str]) -> str:
        self._arity(args, "tap <habit> <date>", 2)
        self._require(args[0])
        key = parse_date_key(args[1])
        updated = self.store.increment_entry(args[0], key)
        return _describe(updated, key) if updated else ""

    def _adjust(self, args: list[str], increment: bool) -> str:
        self._arity(args, "inc|dec <habit> <date>", 2)
        self._require(args[0], numeric=True)
        key = parse_date_key(args[1])
        updated = self.store.adjust_entry(args[0], key, increment)
        return _describe(updated, key) if updated else ""

    def _scroll(self, args: list[str]) -> str:
        self._arity(args, "scroll <index>", 1)
        try:
            index = int(args[0])
        except ValueError:
            raise ValidationError(f"invalid index '{args[0]}'") from None
        index = min(max(index, 0), len(self.window) - 1)
        change = self.window.on_scroll_position_changed(index, len(self.window))
        self.focus = index + change.added_future
        first = self.window.dates[self.focus]
        return (
            f"↔ {first.isoformat()}  window {self.window.end_date}..{self.window.start_date}"
            f"  ({len(self.window)} days)"
        )

    def _today(self, args: list[str]) -> str:
        self._arity(args, "today", 0)
        self.focus = self.window.initial_focus_index()
        return f"↔ {self.window.today.isoformat()}"

    def _grid(self, args: list[str]) -> str:
        self._arity(args, "grid [days]", 0, 1)
        days = self.view_days
        if args:
            try:
                days = int(args[0])
            except ValueError:
                raise ValidationError(f"invalid day count '{args[0]}'") from None
        columns = snapshot(self.store.habits, self.window, self.focus, max(days, 1))
        return render_grid(self.store.habits, columns)

    # ── loop ─────────────────────────────────────────────────────────────────

    def execute(self, line: str) -> str:
        try:
            argv = shlex.split(line)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if not argv:
            return ""
        name, *args = argv
        command = self._commands.get(name.lower())
        if command is None:
            raise ValidationError(f"unknown command '{name}' (try help)")
        return command(args)

    def run(self, lines: Iterable[str]) -> int:
        """Execute commands until input ends or ``quit``. Returns the error count."""
        errors = 0
        for line in lines:
            if line.strip().lower() in ("quit", "exit", "q"):
                break
            try:
                output = self.execute(line)
            except ConsistencyError as e:
                errors += 1
                sys.stderr.write(f"{e}\n")
                continue
            if output:
                echo(output)
        return errors


# ── cli ──────────────────────────────────────────────────────────────────────


def _new_store(sample: bool) -> HabitStore:
    return HabitStore(sample_habits() if sample else None)


@cli("consistency", name="session")
def session(sample: bool = False, days: int = 7) -> None:
    """Track habits interactively (reads commands from stdin)"""
    if sys.stdin.isatty():
        echo(ansi.dim("type help for commands, quit to leave"))
    errors = Session(_new_store(sample), view_days=days).run(sys.stdin)
    if errors:
        exit_error(f"{errors} command(s) failed")


@cli("consistency", name="grid")
def grid_cmd(days: int = 7, sample: bool = False) -> None:
    """Show the habit grid from today back"""
    echo(Session(_new_store(sample), view_days=days).execute("grid"))
