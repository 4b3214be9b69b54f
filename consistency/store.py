import dataclasses
import logging
from collections.abc import Iterable
from decimal import Decimal

from .core.errors import ValidationError
from .core.models import (
    DEFAULT_COLOR,
    BooleanValue,
    DateKey,
    Habit,
    HabitType,
    HabitValue,
    NumericValue,
)
from .values import Number, normalize, step

__all__ = [
    "HabitStore",
    "sample_habits",
]

logger = logging.getLogger(__name__)


class HabitStore:
    """Ordered, in-memory habit list.

    Habits are frozen; every mutation swaps a rebuilt Habit into the list at
    the same position, so a snapshot taken from ``habits`` never changes
    underneath its reader. Unknown ids and type mismatches are no-ops that
    return None; a successful mutation returns the replacement Habit.
    """

    def __init__(self, habits: Iterable[Habit] | None = None):
        self._habits: list[Habit] = list(habits) if habits else []

    @property
    def habits(self) -> tuple[Habit, ...]:
        return tuple(self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    # ── lookup ───────────────────────────────────────────────────────────────

    def _index_of(self, habit_id: str) -> int:
        return next((i for i, h in enumerate(self._habits) if h.id == habit_id), -1)

    def get_habit(self, habit_id: str) -> Habit | None:
        index = self._index_of(habit_id)
        return self._habits[index] if index >= 0 else None

    def get_entry(self, habit_id: str, key: DateKey) -> HabitValue | None:
        habit = self.get_habit(habit_id)
        return habit.entries.get(key) if habit else None

    # ── creation ─────────────────────────────────────────────────────────────

    def add_habit(self, habit: Habit) -> None:
        self._habits.append(habit)

    def next_id(self) -> str:
        return str(len(self._habits) + 1)

    def create_habit(
        self,
        name: str,
        habit_type: HabitType = HabitType.BOOLEAN,
        unit: str = "",
        color: int = DEFAULT_COLOR,
    ) -> Habit:
        name = name.strip()
        if not name:
            raise ValidationError("habit name cannot be empty")
        habit = Habit(
            id=self.next_id(),
            name=name,
            color=color,
            type=habit_type,
            unit=unit.strip(),
        )
        self.add_habit(habit)
        return habit

    # ── mutation ─────────────────────────────────────────────────────────────

    def _resolve(self, habit_id: str, numeric: bool) -> int:
        index = self._index_of(habit_id)
        if index < 0:
            logger.debug("no habit %r, ignoring", habit_id)
            return -1
        habit = self._habits[index]
        if habit.type.is_numeric != numeric:
            logger.debug("habit %r is %s, ignoring", habit_id, habit.type.name)
            return -1
        return index

    def _write_entry(self, index: int, key: DateKey, value: HabitValue) -> Habit:
        habit = self._habits[index]
        updated = dataclasses.replace(habit, entries={**habit.entries, key: value})
        self._habits[index] = updated
        return updated

    def _current_amount(self, habit: Habit, key: DateKey) -> Decimal:
        match habit.entries.get(key):
            case NumericValue(value=value):
                return value
            case _:
                return Decimal(0)

    def toggle_boolean(self, habit_id: str, key: DateKey) -> Habit | None:
        index = self._resolve(habit_id, numeric=False)
        if index < 0:
            return None
        match self._habits[index].entries.get(key):
            case BooleanValue(completed=True):
                value = BooleanValue(False)
            case _:
                value = BooleanValue(True)
        return self._write_entry(index, key, value)

    def set_numeric(self, habit_id: str, key: DateKey, raw: Number) -> Habit | None:
        index = self._resolve(habit_id, numeric=True)
        if index < 0:
            return None
        value = normalize(self._habits[index].type, raw)
        return self._write_entry(index, key, value)

    def adjust_entry(self, habit_id: str, key: DateKey, increment: bool = True) -> Habit | None:
        index = self._resolve(habit_id, numeric=True)
        if index < 0:
            return None
        habit = self._habits[index]
        value = step(habit.type, self._current_amount(habit, key), increment)
        return self._write_entry(index, key, value)

    def increment_entry(self, habit_id: str, key: DateKey) -> Habit | None:
        habit = self.get_habit(habit_id)
        if habit is None:
            logger.debug("no habit %r, ignoring", habit_id)
            return None
        match habit.type:
            case HabitType.BOOLEAN:
                return self.toggle_boolean(habit_id, key)
            case HabitType.WHOLE_NUMBER | HabitType.DECIMAL:
                return self.adjust_entry(habit_id, key, increment=True)


def sample_habits() -> list[Habit]:
    return [
        Habit(
            id="1",
            name="Wake up early",
            color=0xFF2196F3,
            type=HabitType.BOOLEAN,
            entries={
                "2025-02-08": BooleanValue(True),
                "2025-02-07": BooleanValue(True),
                "2025-02-06": BooleanValue(False),
            },
        ),
        Habit(
            id="2",
            name="Run",
            color=0xFFE91E63,
            type=HabitType.DECIMAL,
            unit="miles",
            entries={
                "2025-02-08": normalize(HabitType.DECIMAL, "0.9"),
                "2025-02-07": normalize(HabitType.DECIMAL, "1.2"),
                "2025-02-06": normalize(HabitType.DECIMAL, "1.3"),
            },
        ),
        Habit(
            id="3",
            name="Read books",
            color=0xFFFF9800,
            type=HabitType.WHOLE_NUMBER,
            unit="pages",
            entries={
                "2025-02-08": normalize(HabitType.WHOLE_NUMBER, 50),
                "2025-02-07": normalize(HabitType.WHOLE_NUMBER, 38),
                "2025-02-06": normalize(HabitType.WHOLE_NUMBER, 65),
            },
        ),
    ]
