import re
from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from ..core.errors import ValidationError
from ..core.models import DateKey, date_key
from . import clock

__all__ = ["parse_date", "parse_date_key"]

_OFFSET_RE = re.compile(r"[+-]\d+")
_RELATIVE = {"today": 0, "yesterday": -1, "tomorrow": 1}


def parse_date(date_str: str) -> date:
    """Parses a date string ('today', 'yesterday', 'tomorrow', '-3', 'YYYY-MM-DD', '8 feb 2025')."""
    text = date_str.strip().lower()
    today = clock.today()

    if not text:
        raise ValidationError("date cannot be empty")
    if text in _RELATIVE:
        return today + timedelta(days=_RELATIVE[text])
    if _OFFSET_RE.fullmatch(text):
        try:
            return today + timedelta(days=int(text))
        except OverflowError:
            raise ValidationError(f"invalid date '{date_str}'") from None
    if text[0] in "+-":
        raise ValidationError(f"invalid date '{date_str}'")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dateutil_parser.parse(
            date_str, default=datetime(today.year, today.month, today.day)
        ).date()
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"invalid date '{date_str}'") from None


def parse_date_key(date_str: str) -> DateKey:
    return date_key(parse_date(date_str))
