"""
Generation of hourly slots from a court's weekly operating hours.

These functions are pure: they return ``SlotCandidate`` values and never touch
the database. Persisting them (and merging with booked slots) is done by
``app.crud.slot``.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional
import logging

from app.services.exceptions import ValidationError
from app.utils.time_utils import (
    minutes_to_time_string,
    parse_time_to_minutes,
    to_date,
    weekday_name,
)

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60


@dataclass(frozen=True)
class SlotCandidate:
    date: date
    time: str
    is_booked: bool = False

    @property
    def key(self):
        return (self.date, self.time)


def find_operating_hours(
    operating_hours: Iterable[Mapping], day_name: str
) -> Optional[Mapping]:
    """Return the entry whose ``day`` matches ``day_name`` exactly, or None."""
    for entry in operating_hours or []:
        if entry.get("day") == day_name:
            return entry
    return None


def hourly_labels(open_time: str, close_time: str) -> List[str]:
    """
    Hourly "HH:MM" labels from ``open_time`` while a whole hour fits before
    ``close_time``. A trailing partial hour is dropped and ``open >= close``
    gives no labels.
    """
    current = parse_time_to_minutes(open_time)
    close = parse_time_to_minutes(close_time)

    labels = []
    while current + SLOT_MINUTES <= close:
        labels.append(minutes_to_time_string(current))
        current += SLOT_MINUTES
    return labels


def generate_slots(day, operating_hours: Iterable[Mapping]) -> List[SlotCandidate]:
    """
    Generate the slots of a single day.

    Args:
        day: date (or datetime, normalized to its date)
        operating_hours: list of {"day": "Monday", "open": "08:00", "close": "22:00"}

    Returns:
        Unbooked slot candidates for that day, in time order
    """
    slot_date = to_date(day)
    entry = find_operating_hours(operating_hours, weekday_name(slot_date))
    if not entry:
        return []

    return [
        SlotCandidate(date=slot_date, time=label)
        for label in hourly_labels(entry["open"], entry["close"])
    ]


def iter_days(start_date, end_date):
    current = to_date(start_date)
    last = to_date(end_date)
    while current <= last:
        yield current
        current += timedelta(days=1)


def generate_slots_for_range(
    start_date, end_date, operating_hours: Iterable[Mapping]
) -> List[SlotCandidate]:
    """Generate slots for every day from ``start_date`` to ``end_date`` inclusive."""
    operating_hours = list(operating_hours or [])
    slots = []
    for day in iter_days(start_date, end_date):
        slots.extend(generate_slots(day, operating_hours))
    return slots


def generate_window_slots(
    start_date, end_date, start_time: str, end_time: str
) -> List[SlotCandidate]:
    """
    Slots for an owner-defined window: the same hours on every day of the
    range, regardless of the court's operating hours.
    """
    labels = hourly_labels(start_time, end_time)
    return [
        SlotCandidate(date=day, time=label)
        for day in iter_days(start_date, end_date)
        for label in labels
    ]


def horizon_range(today: date, horizon_days: int):
    """Date range covered by the rolling slot horizon."""
    return today, today + timedelta(days=horizon_days)


def check_window_range(start_date, end_date, today: date, max_days: int) -> None:
    """
    Reject owner windows that start in the past or span more than
    ``max_days`` days.
    """
    start = to_date(start_date)
    end = to_date(end_date)
    if start < today:
        raise ValidationError("Cannot add time slots for past dates.")
    if (end - start).days > max_days:
        raise ValidationError(f"Time slot range cannot exceed {max_days} days.")
