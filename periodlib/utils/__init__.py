"""Shared date helpers."""

from .date import (
    DAYS_IN_WEEK,
    day_of_week,
    days_between,
    format_day,
    latest_day_of_month,
    next_day,
    parse_date,
    previous_day,
    to_date,
    weeks_between,
)

__all__ = [
    "DAYS_IN_WEEK",
    "day_of_week",
    "days_between",
    "format_day",
    "latest_day_of_month",
    "next_day",
    "parse_date",
    "previous_day",
    "to_date",
    "weeks_between",
]
