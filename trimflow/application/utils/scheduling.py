from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo

from trimflow.application.exceptions import ParseError, ValidationError

# Static list, not derived from barber capacity or existing bookings.
OFFERED_TIME_LABELS: tuple[str, ...] = (
    "10:00 AM",
    "11:00 AM",
    "1:00 PM",
    "2:30 PM",
    "4:00 PM",
    "5:00 PM",
)

TIME_LABEL_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s+(am|pm)\s*$", re.IGNORECASE)


def offered_time_labels() -> tuple[str, ...]:
    return OFFERED_TIME_LABELS


def offered_dates(today: date, days: int = 14) -> list[date]:
    """Rolling booking window starting today."""
    return [today + timedelta(days=i) for i in range(days)]


def parse_time_label(label: str) -> tuple[int, int]:
    """Parse a 12-hour "h:mm AM|PM" label. Returns (hour, minute) on the 24-hour clock."""
    match = TIME_LABEL_PATTERN.match(label or "")
    if not match:
        raise ParseError(f"Invalid time label: {label!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    period = match.group(3).upper()

    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise ParseError(f"Invalid time label: {label!r}")

    if period == "PM" and hour != 12:
        hour += 12
    elif period == "AM" and hour == 12:
        hour = 0

    return (hour, minute)


def to_point_in_time(day: date, label: str, timezone: tzinfo) -> datetime:
    """Combine a calendar date at local midnight with the offset named by `label`."""
    hour, minute = parse_time_label(label)
    midnight = datetime.combine(day, time.min, tzinfo=timezone)
    return midnight.replace(hour=hour, minute=minute)


def ensure_bookable_date(day: date, today: date) -> None:
    if day < today:
        raise ValidationError(f"Cannot book a date in the past: {day.isoformat()}")
