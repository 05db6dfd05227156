"""
Reconciles a selection range with the period list of the active granularity.

When a selection boundary falls inside a period, that period is split into two
fractional periods so that the selection indices point at exact positions.
``unseparate_selection`` merges the split periods back before the next split.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List

import numpy as np

from periodlib.granularity.base import Granularity
from periodlib.granularity.period import DatePeriod
from periodlib.utils.date import DateLike, to_date

logger = logging.getLogger(__name__)

FRACTION_TOLERANCE = 1e-9


class SelectionError(ValueError):
    """Raised when a selection cannot be applied to a period list."""


class EmptyPeriodsError(SelectionError):
    """Raised when splitting against a granularity without periods."""


class PendingSplitError(SelectionError):
    """Raised when a new split is requested before the previous one was merged."""


@dataclass
class TimelineSelection:
    """Active granularity and the positions of the first and last selected periods."""

    current_granularity: Granularity
    selection_start_index: int = 0
    selection_end_index: int = 0

    @classmethod
    def full_range(cls, granularity: Granularity) -> "TimelineSelection":
        return cls(granularity, 0, max(len(granularity.get_date_periods()) - 1, 0))

    @property
    def date_periods(self) -> List[DatePeriod]:
        return self.current_granularity.get_date_periods()


def _find_index(periods: List[DatePeriod], predicate: Callable[[DatePeriod], bool]) -> int:
    for index, period in enumerate(periods):
        if predicate(period):
            return index
    return -1


def _clamp(dt: date, period: DatePeriod) -> date:
    return min(max(dt, period.start_date), period.end_date)


def is_fractional(period: DatePeriod) -> bool:
    return period.fraction < 1.0 - FRACTION_TOLERANCE


def has_pending_split(periods: List[DatePeriod]) -> bool:
    return any(is_fractional(period) for period in periods)


def get_date_ratio(period: DatePeriod, dt: date, from_start: bool) -> float:
    """
    Return the ratio of the given date compared to the whole date period.

    The ratio is measured either from the start or from the end of the period,
    i.e. Feb 7 2016 in the month of Feb 2016 is 0.2069 from the start of the
    month, or 0.7931 from its end.

    Args:
        period: Date period containing the date
        dt: The date
        from_start: Measure from the start of the period instead of its end

    Returns:
        The ratio, or 0 for a period without duration
    """
    date_difference = (dt - period.start_date) if from_start else (period.end_date - dt)

    if not period.days:
        return 0.0

    return date_difference.days / period.days


def separate_selection(
    selection: TimelineSelection,
    start_date: DateLike,
    end_date: DateLike,
) -> None:
    """
    Split the periods containing the selection boundaries and point the
    selection indices at the selected periods.

    i.e. for a quarter granularity and a selection between Feb 6 and Dec 23,
    the periods of Q1 and Q4 are split at those dates. Boundaries outside the
    data are clamped to the first and last period.

    Args:
        selection: Selection state to update
        start_date: First selected day
        end_date: Exclusive end of the selection
    """
    granularity = selection.current_granularity
    date_periods = granularity.get_date_periods()

    if not date_periods:
        raise EmptyPeriodsError(f"{granularity} has no date periods to select")
    if has_pending_split(date_periods):
        raise PendingSplitError(
            f"{granularity} still holds a split period; unseparate the selection first"
        )

    start_date = to_date(start_date)
    end_date = to_date(end_date)
    if start_date >= end_date:
        raise SelectionError(f"Empty selection: [{start_date}, {end_date})")

    start_index = _find_index(date_periods, lambda period: start_date < period.end_date)
    end_index = _find_index(date_periods, lambda period: end_date <= period.end_date)

    start_index = start_index if start_index >= 0 else 0
    end_index = end_index if end_index >= 0 else len(date_periods) - 1

    selection.selection_start_index = start_index
    selection.selection_end_index = end_index

    # Both ratios are taken against the whole, unsplit boundary periods.
    start_ratio = get_date_ratio(
        date_periods[start_index], _clamp(start_date, date_periods[start_index]), True
    )
    end_ratio = get_date_ratio(
        date_periods[end_index], _clamp(end_date, date_periods[end_index]), False
    )

    if 0 < end_ratio < 1:
        granularity.split_period(end_index, end_ratio, end_date)

    if 0 < start_ratio < 1:
        start_fraction = date_periods[start_index].fraction - start_ratio

        granularity.split_period(start_index, start_fraction, start_date)

        selection.selection_start_index += 1
        selection.selection_end_index += 1

    logger.debug(
        "Selection [%s, %s) on %s -> indices %s..%s",
        start_date,
        end_date,
        granularity.get_type().name,
        selection.selection_start_index,
        selection.selection_end_index,
    )


def unseparate_selection(date_periods: List[DatePeriod]) -> int:
    """
    Merge the split periods left by the last ``separate_selection``.

    i.e. combines "Feb 1 2016 - Feb 5 2016" with "Feb 5 2016 - Feb 29 2016"
    into "Feb 1 2016 - Feb 29 2016". At most one selection may be pending.

    Args:
        date_periods: Period list of the granularity, modified in place

    Returns:
        Number of merged period pairs
    """
    merges = 0

    while True:
        separation_index = _find_index(date_periods, is_fractional)
        if separation_index < 0:
            return merges

        if (
            separation_index + 1 >= len(date_periods)
            or date_periods[separation_index + 1].identifier_array
            != date_periods[separation_index].identifier_array
        ):
            raise SelectionError(
                f"Fractional period at {separation_index} has no matching successor"
            )

        period = date_periods[separation_index]
        successor = date_periods[separation_index + 1]

        period.end_date = successor.end_date
        period.fraction += successor.fraction
        if np.isclose(period.fraction, 1.0, rtol=0.0, atol=FRACTION_TOLERANCE):
            period.fraction = 1.0

        del date_periods[separation_index + 1]
        merges += 1
