import calendar
import logging
from datetime import date, datetime
from numbers import Real
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta
from pandas import Timestamp

logger = logging.getLogger(__name__)

# Day formats accepted by to_date, ISO first
ROW_DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")
ISO_DAY_FMT = ROW_DATE_FORMATS[0]

DAYS_IN_WEEK = 7

# February of a leap year, so configured day 29 stays valid
_LEAP_YEAR = 2008

DateLike = Union[str, date, datetime, Timestamp, np.datetime64]


def to_date(date_like: DateLike) -> date:
    """
    Strictly convert a date-like to a plain calendar day, dropping any time of day.

    Strings must be a day in one of ``ROW_DATE_FORMATS``; numpy ``datetime64``
    values go through ``pd.Timestamp``. NaT is rejected.
    """
    if isinstance(date_like, np.datetime64):
        if np.isnat(date_like):
            raise ValueError("Cannot convert NaT to a date")
        return Timestamp(date_like).date()
    if isinstance(date_like, datetime):
        # Timestamp is a datetime subclass; NaT reports itself as one too
        if date_like is pd.NaT:
            raise ValueError("Cannot convert NaT to a date")
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        text = date_like.strip()
        for fmt in ROW_DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"{date_like!r} is not a day in any of {ROW_DATE_FORMATS}")
    raise TypeError(f"Cannot read a date from {type(date_like).__name__}")


def parse_date(value: Any) -> Optional[date]:
    """
    Leniently convert a raw row value to a date.

    Numbers are read as a year (January 1st), strings may be any format pandas
    understands, numpy ``datetime64`` values are converted through pandas.
    Returns None for values that are not dates, NaN and NaT included.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (np.datetime64, date)):
        try:
            return to_date(value)
        except ValueError:
            return None
    if isinstance(value, Real):
        if value != value:  # NaN
            return None
        try:
            return date(int(value), 1, 1)
        except ValueError:
            logger.debug("Year value out of range: %r", value)
            return None
    if isinstance(value, str):
        try:
            return to_date(value)
        except ValueError:
            parsed = pd.to_datetime(value, errors="coerce")
            if pd.isna(parsed):
                return None
            return parsed.date()
    return None


def format_day(dt: DateLike) -> str:
    """ISO day string (``YYYY-MM-DD``) of a date-like."""
    return to_date(dt).strftime(ISO_DAY_FMT)


def day_of_week(dt: date) -> int:
    """Weekday index with Sunday = 0 ... Saturday = 6."""
    return (dt.weekday() + 1) % DAYS_IN_WEEK


def next_day(dt: date) -> date:
    """Day strictly after the given date."""
    return to_date(dt) + relativedelta(days=1)


def previous_day(dt: date) -> date:
    """Day strictly before the given date."""
    return to_date(dt) - relativedelta(days=1)


def days_between(start: date, end: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((end - start).days)


def weeks_between(start: date, end: date) -> int:
    """1-based number of the week that ``end`` falls into, counting from ``start``."""
    return 1 + days_between(start, end) // DAYS_IN_WEEK


def latest_day_of_month(month_index: int) -> int:
    """Latest valid day for a 0-based month index, measured in a leap year."""
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be within 0..11, got {month_index}")
    return calendar.monthrange(_LEAP_YEAR, month_index + 1)[1]
