"""Birthdate parsing and next-birthday arithmetic.

All functions take ``now`` explicitly so callers decide which clock is in
effect. ``now`` is a wall-clock datetime in the local time zone; when it carries
a ``tzinfo`` the computed occurrences share it.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from birthday_greeter.core.errors import InvalidDateError

USERNAME_PATTERN = re.compile(r"[A-Za-z]+")
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_SECONDS_PER_DAY = 86400


def is_valid_username(username: str) -> bool:
    return USERNAME_PATTERN.fullmatch(username) is not None


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Compact ISO forms, times, offsets and surrounding whitespace are rejected.
    """
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidDateError()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError() from exc


def is_future(value: date, now: datetime) -> bool:
    return value > now.date()


def is_before_today(value: date, now: datetime) -> bool:
    return value < now.date()


def _occurrence(year: int, birthdate: date, now: datetime) -> datetime:
    try:
        return datetime(year, birthdate.month, birthdate.day, tzinfo=now.tzinfo)
    except ValueError:
        # 29 February outside a leap year is celebrated on 1 March.
        return datetime(year, 3, 1, tzinfo=now.tzinfo)


def next_occurrence(birthdate: date, now: datetime) -> datetime:
    """Midnight of the next birthday strictly after ``now``."""
    candidate = _occurrence(now.year, birthdate, now)
    if candidate <= now:
        candidate = _occurrence(now.year + 1, birthdate, now)
    return candidate


def days_until_next_occurrence(birthdate: date, now: datetime) -> int:
    """Whole days of elapsed time between ``now`` and the next birthday, rounded down.

    Measured on the timeline, so a DST shift before the birthday counts as the
    hour it really is. Naive datetimes are read in the local time zone.
    """
    elapsed = next_occurrence(birthdate, now).timestamp() - now.timestamp()
    return int(elapsed // _SECONDS_PER_DAY)


def is_birthday(birthdate: date, now: datetime) -> bool:
    occurrence = _occurrence(now.year, birthdate, now)
    return (occurrence.month, occurrence.day) == (now.month, now.day)


def greeting(username: str, birthdate: date, now: datetime) -> str:
    if is_birthday(birthdate, now):
        return f"Hello, {username}! Happy birthday!"
    days = days_until_next_occurrence(birthdate, now)
    return f"Hello, {username}! Your birthday is in {days} day(s)"


__all__ = [
    "USERNAME_PATTERN",
    "is_valid_username",
    "parse_date",
    "is_future",
    "is_before_today",
    "next_occurrence",
    "days_until_next_occurrence",
    "is_birthday",
    "greeting",
]
