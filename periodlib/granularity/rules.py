"""
Bucket keys and labels for each granularity.

Every granularity type maps to a ``GranularityRules`` record in an
enum-indexed table; ``Granularity`` dispatches through that table instead of
subclassing per type.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from periodlib.calendars.calendar import Calendar
from periodlib.calendars.types import GranularityType

from .period import DatePeriod, Identifier, TimelineLabel

SplitDateFunc = Callable[[Calendar, date], Identifier]
SameLabelFunc = Callable[[Calendar, DatePeriod, DatePeriod], bool]
GenerateLabelFunc = Callable[[Calendar, DatePeriod], TimelineLabel]
TitleFunc = Callable[[Calendar, date], List[Union[str, int]]]

YEAR_DISPLAY_NAME = "Year"
WEEK_DISPLAY_NAME = "Week"


def short_month_name(dt: date) -> str:
    """Short month name of the given date (e.g. Jan, Feb, Mar)."""
    return dt.strftime("%b")


@dataclass(frozen=True)
class GranularityRules:
    granularity_type: GranularityType
    split_date: SplitDateFunc
    same_label: SameLabelFunc
    generate_label: GenerateLabelFunc
    split_date_for_title: Optional[TitleFunc] = None

    def title_parts(self, calendar: Calendar, dt: date) -> List[Union[str, int]]:
        if self.split_date_for_title is not None:
            return self.split_date_for_title(calendar, dt)
        return list(self.split_date(calendar, dt))


# Year
def _year_split_date(calendar: Calendar, dt: date) -> Identifier:
    return (calendar.determine_year(dt),)


def _year_same_label(calendar: Calendar, first: DatePeriod, second: DatePeriod) -> bool:
    return first.year == second.year


def _year_generate_label(calendar: Calendar, period: DatePeriod) -> TimelineLabel:
    return TimelineLabel(
        id=period.index,
        text=f"{period.year}",
        title=f"{YEAR_DISPLAY_NAME} {period.year}",
    )


# Quarter
def _quarter_split_date(calendar: Calendar, dt: date) -> Identifier:
    return (calendar.get_quarter_text(dt), calendar.determine_year(dt))


def _quarter_same_label(calendar: Calendar, first: DatePeriod, second: DatePeriod) -> bool:
    return (
        calendar.get_quarter_text(first.start_date) == calendar.get_quarter_text(second.start_date)
        and first.year == second.year
    )


def _quarter_generate_label(calendar: Calendar, period: DatePeriod) -> TimelineLabel:
    quarter = calendar.get_quarter_text(period.start_date)
    return TimelineLabel(
        id=period.index,
        text=quarter,
        title=f"{quarter} {period.year}",
    )


# Month
def _month_split_date(calendar: Calendar, dt: date) -> Identifier:
    """Calendar month name and fiscal year; unique only against the neighbouring periods."""
    return (short_month_name(dt), calendar.determine_year(dt))


def _month_same_label(calendar: Calendar, first: DatePeriod, second: DatePeriod) -> bool:
    return (
        short_month_name(first.start_date) == short_month_name(second.start_date)
        and calendar.determine_year(first.start_date) == calendar.determine_year(second.start_date)
    )


def _month_generate_label(calendar: Calendar, period: DatePeriod) -> TimelineLabel:
    quarter = calendar.get_quarter_text(period.start_date)
    month_name = short_month_name(period.start_date)
    return TimelineLabel(
        id=period.index,
        text=month_name,
        title=f"{month_name} {period.year}, {quarter}",
    )


# Week
def _week_split_date(calendar: Calendar, dt: date) -> Identifier:
    return tuple(calendar.determine_week(dt))


def _week_split_date_for_title(calendar: Calendar, dt: date) -> List[Union[str, int]]:
    week_number, week_year = calendar.determine_week(dt)
    return [f"W{week_number}", week_year]


def _week_same_label(calendar: Calendar, first: DatePeriod, second: DatePeriod) -> bool:
    return tuple(first.week) == tuple(second.week)


def _week_generate_label(calendar: Calendar, period: DatePeriod) -> TimelineLabel:
    quarter = calendar.get_quarter_text(period.start_date)
    month_name = short_month_name(period.start_date)
    week_number, week_year = period.week
    return TimelineLabel(
        id=period.index,
        text=f"W{week_number}",
        title=f"{WEEK_DISPLAY_NAME} {week_number} - {week_year}, {quarter} {month_name}",
    )


# Day
def _day_split_date(calendar: Calendar, dt: date) -> Identifier:
    return (short_month_name(dt), dt.day, calendar.determine_year(dt))


def _day_same_label(calendar: Calendar, first: DatePeriod, second: DatePeriod) -> bool:
    return first.start_date == second.start_date


def _day_generate_label(calendar: Calendar, period: DatePeriod) -> TimelineLabel:
    quarter = calendar.get_quarter_text(period.start_date)
    month_name = short_month_name(period.start_date)
    day = period.start_date.day
    return TimelineLabel(
        id=period.index,
        text=f"{day}",
        title=f"{month_name} {day} - {period.year}, {quarter} W{period.week[0]}",
    )


_RULES: Dict[GranularityType, GranularityRules] = {
    GranularityType.YEAR: GranularityRules(
        GranularityType.YEAR, _year_split_date, _year_same_label, _year_generate_label
    ),
    GranularityType.QUARTER: GranularityRules(
        GranularityType.QUARTER, _quarter_split_date, _quarter_same_label, _quarter_generate_label
    ),
    GranularityType.MONTH: GranularityRules(
        GranularityType.MONTH, _month_split_date, _month_same_label, _month_generate_label
    ),
    GranularityType.WEEK: GranularityRules(
        GranularityType.WEEK,
        _week_split_date,
        _week_same_label,
        _week_generate_label,
        split_date_for_title=_week_split_date_for_title,
    ),
    GranularityType.DAY: GranularityRules(
        GranularityType.DAY, _day_split_date, _day_same_label, _day_generate_label
    ),
}


def get_granularity_rules(granularity_type: GranularityType) -> GranularityRules:
    """Return the bucket and label rules of a granularity type."""
    try:
        return _RULES[GranularityType(granularity_type)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported granularity type: {granularity_type}") from exc
