"""Numeric value model: normalization, stepping and display.

Numeric entries are kept as integer-scaled magnitudes while they are
computed. A DECIMAL value of 1.2 is handled as 12 tenths, so repeated
stepping and text entry never pick up binary float error.
"""

from decimal import Decimal, InvalidOperation

from .core.errors import ValidationError
from .core.models import HabitType, NumericValue

__all__ = [
    "display_value",
    "normalize",
    "parse_numeric_input",
    "step",
]

Number = int | float | Decimal | str

MAX_DIGITS = 15

_SCALE = {
    HabitType.WHOLE_NUMBER: 1,
    HabitType.DECIMAL: 10,
}


def _scale_for(habit_type: HabitType) -> int:
    try:
        return _SCALE[habit_type]
    except KeyError:
        raise ValueError(f"{habit_type.name} habits have no numeric values") from None


def _to_decimal(raw: Number) -> Decimal:
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, bool):
        raise TypeError("boolean is not a numeric value")
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        # repr gives the shortest text that round-trips, so 1.2 scales to 12, not 11.
        return Decimal(repr(raw))
    return Decimal(raw.strip())


def _scaled(habit_type: HabitType, raw: Number) -> int:
    return int(_to_decimal(raw) * _scale_for(habit_type))


def _from_scaled(habit_type: HabitType, scaled: int) -> NumericValue:
    scale = _scale_for(habit_type)
    value = Decimal(scaled) if scale == 1 else Decimal(scaled) / scale
    return NumericValue(value, is_whole_number=habit_type is HabitType.WHOLE_NUMBER)


def normalize(habit_type: HabitType, raw: Number) -> NumericValue:
    """Quantize raw input to the habit type's precision.

    WHOLE_NUMBER drops the fractional part, DECIMAL keeps one tenth.
    Both truncate, neither rounds. Input must be non-negative.
    """
    return _from_scaled(habit_type, _scaled(habit_type, raw))


def step(
    habit_type: HabitType,
    current: NumericValue | Number | None,
    increment: bool = True,
) -> NumericValue:
    """Move one unit up or down (1 or 0.1), clamping at zero."""
    if current is None:
        current = 0
    elif isinstance(current, NumericValue):
        current = current.value
    scaled = _scaled(habit_type, current) + (1 if increment else -1)
    return _from_scaled(habit_type, max(scaled, 0))


def display_value(value: NumericValue) -> str:
    if value.is_whole_number:
        return str(int(value.value))
    whole, tenths = divmod(int(value.value * 10), 10)
    return f"{whole}.{tenths}"


def parse_numeric_input(habit_type: HabitType, text: str) -> NumericValue:
    text = text.strip()
    try:
        raw = Decimal(text)
    except InvalidOperation:
        raise ValidationError("Please enter a valid number") from None
    if not raw.is_finite():
        raise ValidationError("Please enter a valid number")
    if raw < 0:
        raise ValidationError("Please enter a positive number")
    if raw and raw.adjusted() > MAX_DIGITS - 1:
        raise ValidationError(f"Please enter a number below 1e{MAX_DIGITS}")
    return normalize(habit_type, raw)
