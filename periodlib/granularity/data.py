"""
Builds every granularity over one date range.
"""

import logging
from datetime import date
from typing import Dict, List

import pandas as pd

from periodlib.calendars.calendar import Calendar
from periodlib.calendars.types import GranularityType
from periodlib.utils.date import next_day, previous_day, to_date

from .base import Granularity
from .period import ExtendedLabel

logger = logging.getLogger(__name__)


class GranularityData:
    """Day-by-day enumeration of a date range and the granularities built from it."""

    def __init__(self, start_date: date, end_date: date):
        start_date = to_date(start_date)
        end_date = to_date(end_date)
        if start_date > end_date:
            raise ValueError(f"start_date {start_date} is after end_date {end_date}")

        self._granularities: Dict[GranularityType, Granularity] = {}
        self._dates: List[date] = self._dates_range(start_date, end_date)
        # exclusive end of the last period
        self._ending_date: date = next_day(self._dates[-1])

    @staticmethod
    def next_day(dt: date) -> date:
        return next_day(dt)

    @staticmethod
    def previous_day(dt: date) -> date:
        return previous_day(dt)

    @staticmethod
    def _dates_range(start_date: date, end_date: date) -> List[date]:
        """Every day between the start date and the end date, inclusive."""
        return [timestamp.date() for timestamp in pd.date_range(start_date, end_date, freq="D")]

    @property
    def dates(self) -> List[date]:
        return list(self._dates)

    @property
    def ending_date(self) -> date:
        return self._ending_date

    @property
    def granularities(self) -> List[Granularity]:
        """Granularities ordered from the coarsest to the finest."""
        return [self._granularities[key] for key in sorted(self._granularities)]

    def add_granularity(self, granularity: Granularity) -> None:
        """
        Reset a granularity, feed it every day of the range and close its last
        period at the ending date.
        """
        granularity.reset_date_periods()
        for dt in self._dates:
            granularity.add_date(dt)
        granularity.set_new_end_date(self._ending_date)

        self._granularities[granularity.get_type()] = granularity

        logger.debug(
            "Built %s granularity: %s periods over %s days",
            granularity.get_type().name,
            len(granularity.get_date_periods()),
            len(self._dates),
        )

    def create_granularities(self, calendar: Calendar) -> None:
        self._granularities = {}
        for granularity_type in GranularityType:
            self.add_granularity(Granularity(granularity_type, calendar))

    def create_labels(self) -> None:
        """Attach labels at every coarser-or-equal level to each granularity."""
        for granularity in self.granularities:
            granularity.set_extended_label(
                ExtendedLabel(
                    year_labels=self._labels_at(granularity, GranularityType.YEAR),
                    quarter_labels=self._labels_at(granularity, GranularityType.QUARTER),
                    month_labels=self._labels_at(granularity, GranularityType.MONTH),
                    week_labels=self._labels_at(granularity, GranularityType.WEEK),
                    day_labels=self._labels_at(granularity, GranularityType.DAY),
                )
            )

    def _labels_at(self, granularity: Granularity, level: GranularityType):
        if granularity.get_type() < level or level not in self._granularities:
            return []
        return granularity.create_labels(self._granularities[level])

    def get_granularity(self, granularity_type: GranularityType) -> Granularity:
        try:
            return self._granularities[GranularityType(granularity_type)]
        except (KeyError, ValueError) as exc:
            raise ValueError(
                f"Granularity {granularity_type} has not been created"
            ) from exc
