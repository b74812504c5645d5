"""
Date utility functions for the planning core.

Weekday indices follow the datastore convention: 0 = Sunday ... 6 = Saturday.
"""
from datetime import date, datetime


WEEKDAY_INDICES = range(7)


def to_day(value):
    """
    Normalize a date, datetime or ISO string to a calendar day.

    Args:
        value: date, datetime, or ISO string (a trailing 'Z' is accepted)

    Returns:
        date: The calendar day, time-of-day dropped

    Raises:
        ValueError: If a string cannot be parsed
        TypeError: If value is of an unsupported type
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    raise TypeError(f"Cannot convert {type(value).__name__} to a date")


def weekday_index(day):
    """Return the Sunday-based weekday index (0-6) of a date."""
    return day.isoweekday() % 7


def format_date(d):
    """Format a date for display, or 'None' if None."""
    if d is None:
        return 'None'
    return d.isoformat()
