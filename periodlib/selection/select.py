"""
Selection helpers: selected dates, range texts and period selection.
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

import pandas as pd

from periodlib.calendars.calendar import Calendar
from periodlib.calendars.types import GranularityType
from periodlib.granularity.period import DatePeriod, DatePeriodBase
from periodlib.utils.date import parse_date, previous_day

from .splitter import TimelineSelection

logger = logging.getLogger(__name__)

DATE_SPLITTER = " - "
DATE_ARRAY_JOINER = " "
DATE_STRING_FMT = "%a %b %d %Y"


def get_start_selection_date(selection: TimelineSelection) -> date:
    """Return the first day of the selection."""
    return selection.date_periods[selection.selection_start_index].start_date


def get_end_selection_date(selection: TimelineSelection) -> date:
    """Return the exclusive end of the selection."""
    return selection.date_periods[selection.selection_end_index].end_date


def get_end_selection_period(selection: TimelineSelection) -> DatePeriod:
    return selection.date_periods[selection.selection_end_index]


def are_bounds_of_selection_and_available_dates_the_same(selection: TimelineSelection) -> bool:
    """True when the whole data range is selected."""
    date_periods = selection.date_periods
    if not date_periods:
        return False

    return (
        date_periods[0].start_date == get_start_selection_date(selection)
        and date_periods[-1].end_date == get_end_selection_date(selection)
    )


def is_granule_selected(period: DatePeriod, selection: TimelineSelection) -> bool:
    return (
        period.start_date >= get_start_selection_date(selection)
        and period.end_date <= get_end_selection_date(selection)
    )


def time_range_text(selection: TimelineSelection) -> str:
    """
    Return the range text of the selection in the units of its granularity,
    e.g. "Feb 3 2014 - Apr 5 2015" or "Q1 2014 - Q2 2015".
    """
    granularity = selection.current_granularity
    start_parts = granularity.split_date_for_title(get_start_selection_date(selection))
    end_parts = granularity.split_date_for_title(get_end_selection_period(selection).start_date)

    start_text = DATE_ARRAY_JOINER.join(str(part) for part in start_parts)
    end_text = DATE_ARRAY_JOINER.join(str(part) for part in end_parts)

    return f"{start_text}{DATE_SPLITTER}{end_text}"


def date_range_text(period: DatePeriod) -> str:
    """Inclusive day range of a period, e.g. "Sat Feb 01 2020 - Sat Feb 29 2020"."""
    last_day = previous_day(period.end_date)
    return (
        f"{period.start_date.strftime(DATE_STRING_FMT)}"
        f"{DATE_SPLITTER}{last_day.strftime(DATE_STRING_FMT)}"
    )


def get_date_period(values: Any) -> DatePeriodBase:
    """
    Derive the data range from raw row values.

    Values that are not dates are ignored; without any date the result is an
    empty period.
    """
    if values is None:
        values = []
    elif isinstance(values, (str, date, int, float)) or not isinstance(values, Iterable):
        values = [values]

    parsed = pd.Series([parse_date(value) for value in values], dtype=object).dropna()
    if parsed.empty:
        return DatePeriodBase.create_empty()

    return DatePeriodBase.create(parsed.min(), parsed.max())


def select_period(
    date_period: DatePeriodBase,
    granularity_type: GranularityType,
    calendar: Calendar,
    period_date: date,
) -> DatePeriodBase:
    """
    Return the whole period of ``granularity_type`` that contains ``period_date``.

    The result is empty when the period is not available in ``date_period``:
    for days the day must lie within the data, for coarser granularities at
    least one boundary of the period must.
    """
    granularity_type = GranularityType(granularity_type)

    if granularity_type == GranularityType.DAY:
        start_date, end_date = period_date, calendar.get_next_date(period_date)
    elif granularity_type == GranularityType.WEEK:
        start_date, end_date = calendar.get_week_period(period_date)
    elif granularity_type == GranularityType.MONTH:
        start_date, end_date = calendar.get_month_period(period_date)
    elif granularity_type == GranularityType.QUARTER:
        start_date, end_date = calendar.get_quarter_period(period_date)
    else:
        start_date, end_date = calendar.get_year_period(period_date)

    if date_period.is_empty:
        return DatePeriodBase.create_empty()

    if granularity_type == GranularityType.DAY:
        available = (
            date_period.start_date <= start_date and end_date <= date_period.end_date
        ) or start_date == date_period.end_date
    else:
        start_available = date_period.start_date <= start_date <= date_period.end_date
        end_available = date_period.start_date <= end_date <= date_period.end_date
        available = start_available or end_available

    if not available:
        logger.debug(
            "%s period [%s, %s) is outside the data range", granularity_type.name, start_date, end_date
        )
        return DatePeriodBase.create_empty()

    return DatePeriodBase.create(start_date, end_date)


def select_current_period(
    date_period: DatePeriodBase,
    granularity_type: GranularityType,
    calendar: Calendar,
    today: Optional[date] = None,
) -> DatePeriodBase:
    """Select the period containing today."""
    return select_period(date_period, granularity_type, calendar, today or date.today())
