"""
Granularity: ordered date periods of one bucket resolution.
"""

import logging
from datetime import date
from typing import List, Optional, Union

from periodlib.calendars.calendar import Calendar, WeekId
from periodlib.calendars.types import GranularityType

from .period import DatePeriod, ExtendedLabel, Identifier, TimelineLabel
from .rules import GranularityRules, get_granularity_rules

logger = logging.getLogger(__name__)


class Granularity:
    """Date periods of one granularity built against a calendar.

    The periods are built once per rebuild cycle (``reset_date_periods``,
    ``add_date`` for every day in ascending order, ``set_new_end_date``) and
    afterwards only changed by ``split_period`` and the selection merge.
    """

    DEFAULT_FRACTION: float = 1.0

    def __init__(self, granularity_type: GranularityType, calendar: Calendar):
        self._rules: GranularityRules = get_granularity_rules(granularity_type)
        self.calendar = calendar

        self._date_periods: List[DatePeriod] = []
        self._extended_label: ExtendedLabel = ExtendedLabel()

    def __repr__(self) -> str:
        return f"Granularity({self.get_type().name}, periods={len(self._date_periods)})"

    def get_type(self) -> GranularityType:
        return self._rules.granularity_type

    # ------------------------------------------------------------------
    # Bucket keys and labels
    # ------------------------------------------------------------------
    def split_date(self, dt: date) -> Identifier:
        """Return the tokens identifying the bucket of a date."""
        return self._rules.split_date(self.calendar, dt)

    def split_date_for_title(self, dt: date) -> List[Union[str, int]]:
        return self._rules.title_parts(self.calendar, dt)

    def same_label(self, first: DatePeriod, second: DatePeriod) -> bool:
        return self._rules.same_label(self.calendar, first, second)

    def generate_label(self, period: DatePeriod) -> TimelineLabel:
        return self._rules.generate_label(self.calendar, period)

    def determine_week(self, dt: date) -> WeekId:
        return self.calendar.determine_week(dt)

    def determine_year(self, dt: date) -> int:
        return self.calendar.determine_year(dt)

    # ------------------------------------------------------------------
    # Period list
    # ------------------------------------------------------------------
    def reset_date_periods(self) -> None:
        self._date_periods = []

    def get_date_periods(self) -> List[DatePeriod]:
        return self._date_periods

    def get_extended_label(self) -> ExtendedLabel:
        return self._extended_label

    def set_extended_label(self, extended_label: ExtendedLabel) -> None:
        self._extended_label = extended_label

    def count_full_periods(self) -> int:
        """Number of periods with an integral index."""
        return sum(1 for period in self._date_periods if period.is_whole)

    def create_labels(self, granularity: "Granularity") -> List[TimelineLabel]:
        """Coalesce this granularity's periods into labels of a coarser-or-equal granularity.

        A new label starts whenever ``granularity.same_label`` reports that the
        current period belongs to a different bucket than the last labelled one.
        """
        labels: List[TimelineLabel] = []
        last_date_period: Optional[DatePeriod] = None

        for date_period in self._date_periods:
            if not labels or not granularity.same_label(date_period, last_date_period):
                last_date_period = date_period
                labels.append(granularity.generate_label(date_period))

        return labels

    def add_date(self, dt: date) -> None:
        """
        Add the next day of the range.

        If the day belongs to the bucket of the last period, that period is
        extended. Otherwise the last period is closed at this day and a new
        period is opened. Days must be added in ascending order.
        """
        date_periods = self._date_periods
        identifier_array = self.split_date(dt)

        if not date_periods or date_periods[-1].identifier_array != identifier_array:
            if date_periods:
                date_periods[-1].end_date = dt

            date_periods.append(
                DatePeriod(
                    identifier_array=identifier_array,
                    start_date=dt,
                    end_date=dt,
                    week=self.determine_week(dt),
                    year=self.determine_year(dt),
                    fraction=self.DEFAULT_FRACTION,
                    index=len(date_periods),
                )
            )
        else:
            date_periods[-1].end_date = dt

    def set_new_end_date(self, dt: date) -> None:
        """Close the last period at the exclusive end of the range."""
        if not self._date_periods:
            raise ValueError("Cannot set the end date of an empty granularity")
        self._date_periods[-1].end_date = dt

    def split_period(self, index: int, new_fraction: float, new_date: date) -> None:
        """
        Split a period into two contiguous periods of the same bucket.

        The split period is kept and ends at ``new_date``; the new period is
        inserted right after it, starting at ``new_date``.

        Args:
            index: Position of the period to split
            new_fraction: Fraction of the bucket given to the new period
            new_date: Date at which the period is split
        """
        if not 0 <= index < len(self._date_periods):
            raise ValueError(
                f"Period index {index} out of range for {len(self._date_periods)} periods"
            )

        old_date_period = self._date_periods[index]

        if not 0 < new_fraction < old_date_period.fraction:
            raise ValueError(
                f"Split fraction {new_fraction} must be within (0, {old_date_period.fraction})"
            )
        if not old_date_period.start_date < new_date < old_date_period.end_date:
            raise ValueError(
                f"Split date {new_date} outside period "
                f"[{old_date_period.start_date}, {old_date_period.end_date})"
            )

        old_date_period.fraction -= new_fraction

        new_date_period = DatePeriod(
            identifier_array=old_date_period.identifier_array,
            start_date=new_date,
            end_date=old_date_period.end_date,
            week=self.determine_week(new_date),
            year=self.determine_year(new_date),
            fraction=new_fraction,
            index=old_date_period.index + old_date_period.fraction,
        )

        old_date_period.end_date = new_date

        self._date_periods.insert(index + 1, new_date_period)

        logger.debug(
            "Split %s period %s at %s (fractions %.6f / %.6f)",
            self.get_type().name,
            index,
            new_date,
            old_date_period.fraction,
            new_fraction,
        )
