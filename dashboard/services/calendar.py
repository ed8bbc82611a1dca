"""
Date helpers used by the aggregation functions.

Values arriving from the stores may be ``date`` or ``datetime`` objects or
ISO strings (the hosted backend returns strings).  Everything is reduced
to a calendar date in the current Django time zone before comparing, so an
appointment stored as ``2024-01-10T23:30:00-05:00`` lands on the same day
the dashboard displays it.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

MONDAY = 0
SUNDAY = 6

# Sort sentinel for records without a timestamp.
EARLIEST = datetime.min.replace(tzinfo=dt_timezone.utc)


def as_datetime(value) -> Optional[datetime]:
    """Return an aware datetime for ``value`` or ``None`` when unusable."""
    if value is None or value == '':
        return None
    if isinstance(value, str):
        parsed = None
        try:
            parsed = parse_datetime(value)
            if parsed is None:
                parsed = parse_date(value)
        except ValueError:
            return None
        if parsed is None:
            return None
        value = parsed
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value
    if isinstance(value, date):
        return timezone.make_aware(datetime.combine(value, time.min))
    return None


def as_date(value) -> Optional[date]:
    """Return the calendar date of ``value`` (time of day stripped)."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localtime(value).date()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = parse_date(value)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
        return as_date(as_datetime(value))
    return None


def is_same_day(left, right) -> bool:
    left_day = as_date(left)
    return left_day is not None and left_day == as_date(right)


def add_days(value, days: int) -> date:
    return as_date(value) + timedelta(days=days)


def start_of_week(value, week_starts_on: int = SUNDAY) -> date:
    """First day of the week containing ``value``.

    ``week_starts_on`` uses Python weekday numbers (Monday=0, Sunday=6).
    """
    day = as_date(value)
    offset = (day.weekday() - week_starts_on) % 7
    return day - timedelta(days=offset)


def week_days(value, week_starts_on: int = SUNDAY) -> list[date]:
    first = start_of_week(value, week_starts_on)
    return [first + timedelta(days=i) for i in range(7)]
