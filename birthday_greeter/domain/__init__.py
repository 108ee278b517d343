"""Domain rules for usernames, birthdates and greetings reused by the API."""

from birthday_greeter.domain.birthdays import (
    days_until_next_occurrence,
    greeting,
    is_before_today,
    is_birthday,
    is_future,
    is_valid_username,
    next_occurrence,
    parse_date,
)

__all__ = [
    "days_until_next_occurrence",
    "greeting",
    "is_before_today",
    "is_birthday",
    "is_future",
    "is_valid_username",
    "next_occurrence",
    "parse_date",
]
