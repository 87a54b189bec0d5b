"""Local calendar-day normalization.

Records carry dates in two shapes: applications store a bare calendar date,
interviews store a timestamp that may include a time of day and a UTC offset.
Both are reduced to a ``datetime.date`` built from the year/month/day the user
actually wrote down. Timestamps are never shifted into another timezone, so an
interview at ``2024-03-15T23:30:00Z`` lands on March 15 wherever the host runs.
"""

import calendar
from datetime import date, datetime
from typing import Union

WEEK_STARTS = ("sunday", "monday")


def application_day(value: Union[date, datetime, str]) -> date:
    """Calendar day an application was submitted on."""
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid application date: {value!r}") from None


def interview_day(value: Union[date, datetime, str]) -> date:
    """Calendar day of an interview timestamp, ignoring time of day and offset.

    Raises ValueError if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    return _parse_timestamp(value)


def interview_wall_time(value: Union[date, datetime, str]) -> datetime:
    """Naive wall-clock datetime of an interview, as written."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return _parse_datetime(value).replace(tzinfo=None)


def day_key(day: date) -> str:
    """Canonical ``YYYY-MM-DD`` bucket key."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def month_shape(year: int, month: int, week_start: str = "sunday") -> tuple[int, int]:
    """Return (days in month, grid offset of day 1) for a 7-column calendar."""
    if week_start not in WEEK_STARTS:
        raise ValueError(f"week_start must be one of {WEEK_STARTS}, got {week_start!r}")

    weekday, days_in_month = calendar.monthrange(year, month)
    # monthrange counts from Monday == 0
    if week_start == "sunday":
        return days_in_month, (weekday + 1) % 7
    return days_in_month, weekday


def _parse_datetime(value: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("Empty date value")
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date value: {value!r}") from None


def _parse_timestamp(value: str) -> date:
    parsed = _parse_datetime(value)
    # Re-anchor on the written calendar components, never on a converted instant
    return date(parsed.year, parsed.month, parsed.day)
