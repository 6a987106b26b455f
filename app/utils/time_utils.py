"""
Helpers for the "HH:MM" time labels and date-only values used by slots.
"""

from datetime import date, datetime
from typing import Union

from app.services.exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


def parse_time_to_minutes(time_str: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    "24:00" is accepted as the end of the day.

    Raises:
        ValidationError: if the string is not a valid 24h time.
    """
    try:
        parts = time_str.split(":")
        if len(parts) != 2:
            raise ValueError(time_str)
        hours = int(parts[0])
        minutes = int(parts[1])
    except (ValueError, AttributeError):
        raise ValidationError(f"Invalid time format: {time_str!r} (expected HH:MM)")

    if not (0 <= minutes < 60) or not (0 <= hours <= 24):
        raise ValidationError(f"Invalid time format: {time_str!r} (expected HH:MM)")
    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        raise ValidationError(f"Invalid time format: {time_str!r} (expected HH:MM)")
    return total


def minutes_to_time_string(minutes: int) -> str:
    hours = minutes // 60
    mins = minutes % 60
    return f"{hours:02d}:{mins:02d}"


def normalize_time_label(time_str: str) -> str:
    """Return the canonical zero-padded form of a time label ("8:00" -> "08:00")."""
    return minutes_to_time_string(parse_time_to_minutes(time_str))


def to_date(value: Union[date, datetime, str]) -> date:
    """Normalize a date, datetime or ISO string to a date-only value (local midnight)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]
