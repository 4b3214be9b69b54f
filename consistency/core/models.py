import dataclasses
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from enum import Enum

DateKey = str

DEFAULT_COLOR = 0xFF2196F3


class HabitType(Enum):
    BOOLEAN = "Yes/No"
    WHOLE_NUMBER = "Count (1, 2, 3...)"
    DECIMAL = "Measurement (1.5, 2.3...)"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self is not HabitType.BOOLEAN


@dataclasses.dataclass(frozen=True)
class BooleanValue:
    completed: bool


@dataclasses.dataclass(frozen=True)
class NumericValue:
    value: Decimal
    is_whole_number: bool = False

    @property
    def display_value(self) -> str:
        from consistency.values import display_value

        return display_value(self)


HabitValue = BooleanValue | NumericValue


@dataclasses.dataclass(frozen=True)
class Habit:
    id: str
    name: str
    color: int = DEFAULT_COLOR
    type: HabitType = HabitType.BOOLEAN
    unit: str = ""
    entries: Mapping[DateKey, HabitValue] = dataclasses.field(default_factory=dict, hash=False)


def date_key(d: date) -> DateKey:
    return d.isoformat()
