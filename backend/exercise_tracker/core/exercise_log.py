"""Exercise Log Rules - value coercion, date-range defaults and result shaping.

Invariants:
    - Stored dates are naive UTC; aware inputs are converted before comparison
    - parse_limit returns None for "no limit" and never raises
    - A non-positive limit is kept as-is (store turns it into zero results)
    - Whole numbers fit a 32-bit signed INTEGER column
    - Log entries expose description, duration, date only (no ids)

Design Decisions:
    - Pure functions, "now" injected by the caller so tests stay deterministic
    - Bare numbers are epoch milliseconds; "YYYY" and "YYYY-MM" are calendar dates
    - Everything else delegated to Pydantic lax datetime coercion
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from exercise_tracker.core.errors import ValidationError

EPOCH = datetime(1970, 1, 1)
CALENDAR_FORMAT = "%a %b %d %Y"
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1

_datetime_adapter = TypeAdapter(datetime)
_leading_integer = re.compile(r"^\s*([+-]?\d+)")
_year_month = re.compile(r"^(\d{4})(?:-(\d{2}))?$")
_numeric = re.compile(r"^[+-]?\d+(\.\d+)?$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Normalize to the naive-UTC representation used by the store."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value: Any, field: str) -> datetime:
    """Coerce a date/datetime/ISO string/epoch milliseconds, or raise ValidationError.

    "2020" and "2020-03" mean the first day of that year/month. Numbers and
    other numeric strings are milliseconds since the Unix epoch.
    """
    invalid = ValidationError(field, f"{field}: {value} is not a valid date")
    if isinstance(value, bool):
        raise invalid
    text = value.strip() if isinstance(value, str) else None
    try:
        if text is not None and (match := _year_month.match(text)):
            return datetime(int(match.group(1)), int(match.group(2) or 1), 1)
        if isinstance(value, (int, float)):
            return EPOCH + timedelta(milliseconds=value)
        if text is not None and _numeric.match(text):
            return EPOCH + timedelta(milliseconds=float(text))
        parsed = _datetime_adapter.validate_python(value)
    except (PydanticValidationError, ValueError, OverflowError):
        raise invalid
    return to_utc_naive(parsed)


def parse_optional_date(value: Any, field: str, default: datetime) -> datetime:
    """Blank or missing input falls back to default."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return parse_date(value, field)


def parse_whole_number(value: Any, field: str) -> int:
    """Accept integers and integral floats/strings; reject everything else.

    "45", 45 and 45.0 all yield 45. 3.5, "abc", True and inf are rejected
    with a message naming the field and the offending value, and so is any
    whole number outside the 32-bit signed range.
    """
    if isinstance(value, bool):
        raise _not_an_integer(value, field)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise _not_an_integer(value, field)
        number = int(value)
    elif isinstance(value, str):
        number = _whole_number_from_text(value, field)
    else:
        raise _not_an_integer(value, field)
    if not INT32_MIN <= number <= INT32_MAX:
        raise ValidationError(field, f"{field}: {value} is out of range")
    return number


def _whole_number_from_text(value: str, field: str) -> int:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise _not_an_integer(value, field)
    if not math.isfinite(number) or not number.is_integer():
        raise _not_an_integer(value, field)
    return int(number)


def _not_an_integer(value: Any, field: str) -> ValidationError:
    return ValidationError(field, f"{field}: {value} is not an integer value")


def parse_limit(raw: Any) -> int | None:
    """Leading integer of the input (parseInt semantics), or None for unbounded."""
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    match = _leading_integer.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def resolve_date_range(
    date_from: Any, date_to: Any, now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Missing from -> epoch start, missing to -> now."""
    now = now or utc_now()
    return (
        parse_optional_date(date_from, "from", EPOCH),
        parse_optional_date(date_to, "to", now),
    )


def format_calendar_date(value: datetime) -> str:
    """Render a date without time of day, e.g. 'Wed Jan 15 2020'."""
    return to_utc_naive(value).strftime(CALENDAR_FORMAT)


def shape_log_entries(exercises: Iterable[Any]) -> list[dict]:
    return [
        {
            "description": e.description,
            "duration": e.duration,
            "date": format_calendar_date(e.date),
        }
        for e in exercises
    ]


def build_log_response(user: Any, exercises: Iterable[Any]) -> dict:
    """count reflects the entries actually returned, after the limit."""
    log = shape_log_entries(exercises)
    return {
        "userId": str(user.id),
        "username": user.username,
        "count": len(log),
        "log": log,
    }
