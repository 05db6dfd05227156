"""
Fiscal calendar: fiscal years, week numbering and period boundaries.
"""

import logging
from datetime import date
from typing import Dict, NamedTuple, Optional, Tuple

from dateutil.relativedelta import relativedelta

from periodlib.utils.date import day_of_week, next_day, weeks_between

from .types import (
    CalendarSettings,
    WeekDaySettings,
    WeekStandard,
    WeekStandardSettings,
)

logger = logging.getLogger(__name__)

WeekId = Tuple[int, int]


class PeriodDates(NamedTuple):
    """Half-open ``[start_date, end_date)`` date range."""

    start_date: date
    end_date: date


class Calendar:
    """Calendar with a configurable fiscal year start and first day of week.

    Instances are immutable snapshots of their settings. The per-year caches of
    first-week dates belong to the instance; a configuration change is handled
    by building a new calendar (see ``is_changed``).
    """

    QUARTER_FIRST_MONTHS: Tuple[int, ...] = (0, 3, 6, 9)

    _EMPTY_YEAR_OFFSET = 0
    _YEAR_OFFSET = 1

    week_standard: WeekStandard = WeekStandard.NOT_SET

    def __init__(
        self,
        calendar_settings: Optional[CalendarSettings] = None,
        week_day_settings: Optional[WeekDaySettings] = None,
    ):
        calendar_settings = calendar_settings or CalendarSettings()
        week_day_settings = week_day_settings or WeekDaySettings()

        self._first_day_of_week = int(week_day_settings.day)
        self._is_day_selection = bool(week_day_settings.day_selection)
        self._first_month_of_year = int(calendar_settings.month)
        self._first_day_of_year = int(calendar_settings.day)
        self._fiscal_year_end_naming = bool(calendar_settings.fiscal_year_end_naming)

        self._quarter_first_months = tuple(
            (month_index + self._first_month_of_year) % 12
            for month_index in self.QUARTER_FIRST_MONTHS
        )

        self._date_of_first_week: Dict[int, date] = {}
        self._date_of_first_full_week: Dict[int, date] = {}

        logger.debug(
            "Created %s: fiscal start month=%s day=%s, first weekday=%s (day selection %s)",
            type(self).__name__,
            self._first_month_of_year,
            self._first_day_of_year,
            self._first_day_of_week,
            self._is_day_selection,
        )

    # ------------------------------------------------------------------
    # Configuration accessors
    # ------------------------------------------------------------------
    def get_first_day_of_week(self) -> int:
        return self._first_day_of_week

    def get_first_month_of_year(self) -> int:
        return self._first_month_of_year

    def get_first_day_of_year(self) -> int:
        return self._first_day_of_year

    def get_quarter_first_months(self) -> Tuple[int, ...]:
        """0-based month indices on which the fiscal quarters start."""
        return self._quarter_first_months

    def is_day_selection(self) -> bool:
        return self._is_day_selection

    def get_fiscal_year_adjustment(self) -> int:
        """1 when fiscal years are labelled by their ending calendar year, else 0."""
        starts_on_first_january = (
            self._first_month_of_year == 0 and self._first_day_of_year == 1
        )
        if self._fiscal_year_end_naming and not starts_on_first_january:
            return self._YEAR_OFFSET
        return self._EMPTY_YEAR_OFFSET

    # ------------------------------------------------------------------
    # Anchored dates
    # ------------------------------------------------------------------
    def _anchor(self, year: int, months: int = 0) -> date:
        """Fiscal start day, ``months`` months after the fiscal start month of ``year``.

        The configured day is clamped to the length of the target month.
        """
        first_of_month = date(year, self._first_month_of_year + 1, 1)
        return first_of_month + relativedelta(months=months, day=self._first_day_of_year)

    def _fiscal_start(self, year: int) -> date:
        return self._anchor(year)

    def _fiscal_base_year(self, dt: date) -> int:
        """Calendar year in which the fiscal year containing ``dt`` starts."""
        return dt.year - (
            self._EMPTY_YEAR_OFFSET
            if self._fiscal_start(dt.year) <= dt
            else self._YEAR_OFFSET
        )

    def _week_start_day(self, year: int) -> int:
        if self._is_day_selection:
            return self._first_day_of_week
        return day_of_week(self._fiscal_start(year))

    # ------------------------------------------------------------------
    # Year and week determination
    # ------------------------------------------------------------------
    def determine_year(self, dt: date) -> int:
        """Fiscal year of a date.

        With a fiscal start after the first of a month, that calendar month
        falls in two fiscal years, so ``(month, year)`` keys can repeat across
        non-adjacent month periods.
        """
        return self._fiscal_base_year(dt) + self.get_fiscal_year_adjustment()

    def determine_week(self, dt: date) -> WeekId:
        """Return ``(week_number, week_year)`` of a date.

        When the fiscal year opens with a short partial week, that partial week
        is week 1 and the first full week is week 2.
        """
        year = self.determine_year(dt)
        # Week boundaries come from the year in which the fiscal year starts.
        base_year = year - self.get_fiscal_year_adjustment()

        date_of_first_week = self.get_date_of_first_week(base_year)
        date_of_first_full_week = self.get_date_of_first_full_week(base_year)
        weeks = weeks_between(date_of_first_full_week, dt)

        if dt >= date_of_first_full_week and date_of_first_week < date_of_first_full_week:
            return weeks + 1, year

        return weeks, year

    def get_date_of_first_week(self, year: int) -> date:
        if year not in self._date_of_first_week:
            self._date_of_first_week[year] = self._fiscal_start(year)

        return self._date_of_first_week[year]

    def get_date_of_first_full_week(self, year: int) -> date:
        if year not in self._date_of_first_full_week:
            self._date_of_first_full_week[year] = self._calculate_date_of_first_full_week(year)

        return self._date_of_first_full_week[year]

    def _calculate_date_of_first_full_week(self, year: int) -> date:
        start = self._fiscal_start(year)
        offset = (self._week_start_day(year) - day_of_week(start)) % 7
        return start + relativedelta(days=offset)

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------
    def get_next_date(self, dt: date) -> date:
        return next_day(dt)

    def get_week_period(self, dt: date) -> PeriodDates:
        week_day = self._week_start_day(self._fiscal_base_year(dt))
        delta_days = (day_of_week(dt) - week_day) % 7

        start_date = dt - relativedelta(days=delta_days)
        end_date = start_date + relativedelta(days=7)

        return PeriodDates(start_date, end_date)

    def get_quarter_index(self, dt: date) -> int:
        """0-based fiscal quarter of a date."""
        base_year = self._fiscal_base_year(dt)
        for quarter_index in reversed(range(len(self.QUARTER_FIRST_MONTHS))):
            if self.get_quarter_start_date(base_year, quarter_index) <= dt:
                return quarter_index
        return 0

    def get_quarter_text(self, dt: date) -> str:
        return f"Q{self.get_quarter_index(dt) + 1}"

    def get_quarter_start_date(self, year: int, quarter_index: int) -> date:
        return self._anchor(year, self.QUARTER_FIRST_MONTHS[quarter_index])

    def get_quarter_period(self, dt: date) -> PeriodDates:
        base_year = self._fiscal_base_year(dt)
        quarter_index = self.get_quarter_index(dt)

        start_date = self.get_quarter_start_date(base_year, quarter_index)
        end_date = self._anchor(base_year, self.QUARTER_FIRST_MONTHS[quarter_index] + 3)

        return PeriodDates(start_date, end_date)

    def get_month_period(self, dt: date) -> PeriodDates:
        first_of_month = dt.replace(day=1)
        start_date = first_of_month + relativedelta(day=self._first_day_of_year)
        if start_date > dt:
            start_date = first_of_month + relativedelta(months=-1, day=self._first_day_of_year)

        end_date = start_date.replace(day=1) + relativedelta(months=1, day=self._first_day_of_year)

        return PeriodDates(start_date, end_date)

    def get_year_period(self, dt: date) -> PeriodDates:
        base_year = self._fiscal_base_year(dt)

        return PeriodDates(self._anchor(base_year), self._anchor(base_year, 12))

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------
    def is_changed(
        self,
        calendar_settings: CalendarSettings,
        week_day_settings: WeekDaySettings,
        week_standard_settings: Optional[WeekStandardSettings] = None,
    ) -> bool:
        """True when the settings require a new calendar instance."""
        week_standard = (
            week_standard_settings.week_standard
            if week_standard_settings is not None
            else WeekStandard.NOT_SET
        )
        return (
            self._first_month_of_year != calendar_settings.month
            or self._first_day_of_year != calendar_settings.day
            or self._fiscal_year_end_naming != calendar_settings.fiscal_year_end_naming
            or self._first_day_of_week != week_day_settings.day
            or self._is_day_selection != week_day_settings.day_selection
            or week_standard != self.week_standard
        )
