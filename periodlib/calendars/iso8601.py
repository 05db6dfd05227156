"""
ISO 8601 week numbering.

Week 1 of a week-year is the week (Monday to Sunday) that contains the year's
first Thursday. Its Monday therefore falls between December 29th of the
previous calendar year and January 4th, so dates around the turn of the year
may belong to a different week-year than their calendar year.
"""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from .calendar import Calendar, WeekId
from .types import (
    CalendarSettings,
    Month,
    WeekDaySettings,
    Weekday,
    WeekStandard,
    WeekStandardSettings,
)

_THURSDAY = 4  # isoweekday


class ISO8601Calendar(Calendar):
    """Calendar with a January 1st year start, Monday weeks and ISO week-years."""

    week_standard = WeekStandard.ISO8601

    def __init__(self):
        super().__init__(
            CalendarSettings(month=Month.JANUARY, day=1),
            WeekDaySettings(day=Weekday.MONDAY, day_selection=True),
        )

    def determine_week(self, dt: date) -> WeekId:
        year = self.determine_week_year(dt)
        date_of_first_week = self.get_date_of_first_week(year)
        weeks = 1 + (dt - date_of_first_week).days // 7

        return weeks, year

    def determine_week_year(self, dt: date) -> int:
        """ISO week-year of a date.

        Early January dates before the Monday of week 1 belong to the previous
        week-year; late December dates on or after the next year's week 1
        Monday belong to the next week-year.
        """
        year = dt.year
        if dt >= self.get_date_of_first_week(year + 1):
            return year + 1
        if dt < self.get_date_of_first_week(year):
            return year - 1
        return year

    def get_date_of_first_week(self, year: int) -> date:
        """Monday of ISO week 1."""
        if year not in self._date_of_first_week:
            first_january = date(year, 1, 1)
            iso_day = first_january.isoweekday()

            if iso_day <= _THURSDAY:
                # Monday on or before January 1st
                first_week = first_january - relativedelta(days=iso_day - 1)
            else:
                # Following Monday
                first_week = first_january + relativedelta(days=8 - iso_day)

            self._date_of_first_week[year] = first_week

        return self._date_of_first_week[year]

    def get_date_of_first_full_week(self, year: int) -> date:
        # ISO weeks never start partially
        if year not in self._date_of_first_full_week:
            self._date_of_first_full_week[year] = self.get_date_of_first_week(year)

        return self._date_of_first_full_week[year]

    def is_changed(
        self,
        calendar_settings: CalendarSettings,
        week_day_settings: WeekDaySettings,
        week_standard_settings: Optional[WeekStandardSettings] = None,
    ) -> bool:
        return (
            week_standard_settings is None
            or week_standard_settings.week_standard != WeekStandard.ISO8601
        )
