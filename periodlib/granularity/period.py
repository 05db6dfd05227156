"""
Core data structures for date periods and labels.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple, Union

from periodlib.utils.date import format_day, parse_date

logger = logging.getLogger(__name__)

Identifier = Tuple[Union[str, int], ...]

_ISO_TIME_SUFFIX = "T00:00:00.000Z"


@dataclass
class DatePeriod:
    """One bucket of a partitioned date range, possibly a fraction of it after a split.

    Attributes:
        identifier_array: Tokens identifying the bucket, e.g. ``("Jan", 2020)``
        start_date: First day of the period
        end_date: Exclusive end of the period
        week: ``(week_number, week_year)`` of ``start_date``
        year: Fiscal year of ``start_date``
        fraction: Portion of the whole bucket covered, in (0, 1]
        index: Ordering key; integral for whole periods, integer plus
            fraction for the tail of a split period
    """

    identifier_array: Identifier
    start_date: date
    end_date: date
    week: Tuple[int, int]
    year: int
    fraction: float = 1.0
    index: float = 0

    @property
    def is_whole(self) -> bool:
        return float(self.index).is_integer()

    @property
    def days(self) -> int:
        """Number of calendar days in the period."""
        return (self.end_date - self.start_date).days


@dataclass
class TimelineLabel:
    title: str
    text: str
    id: float


@dataclass
class ExtendedLabel:
    """Coalesced labels of a granularity at every coarser-or-equal level."""

    year_labels: List[TimelineLabel] = field(default_factory=list)
    quarter_labels: List[TimelineLabel] = field(default_factory=list)
    month_labels: List[TimelineLabel] = field(default_factory=list)
    week_labels: List[TimelineLabel] = field(default_factory=list)
    day_labels: List[TimelineLabel] = field(default_factory=list)


class DatePeriodBase:
    """Plain start/end pair as persisted by the host for the selected range."""

    def __init__(self, start_date: Optional[date], end_date: Optional[date]):
        self.start_date = start_date
        self.end_date = end_date

    @classmethod
    def parse(cls, json_string: Optional[str]) -> "DatePeriodBase":
        """Parse ``{"startDate": ..., "endDate": ...}``; malformed input gives an empty period."""
        start_date: Optional[date] = None
        end_date: Optional[date] = None

        try:
            date_period = json.loads(json_string) if json_string else None
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed date period: %r", json_string)
            date_period = None

        if isinstance(date_period, dict):
            start_date = parse_date(date_period.get("startDate"))
            end_date = parse_date(date_period.get("endDate"))

        return cls.create(start_date, end_date)

    @classmethod
    def create(cls, start_date: Optional[date], end_date: Optional[date]) -> "DatePeriodBase":
        return cls(start_date, end_date)

    @classmethod
    def create_empty(cls) -> "DatePeriodBase":
        return cls.create(None, None)

    @property
    def is_empty(self) -> bool:
        return self.start_date is None or self.end_date is None

    def to_json(self) -> str:
        return json.dumps(
            {
                "endDate": _to_iso_string(self.end_date),
                "startDate": _to_iso_string(self.start_date),
            }
        )

    def __str__(self) -> str:
        return self.to_json()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatePeriodBase):
            return NotImplemented
        return self.start_date == other.start_date and self.end_date == other.end_date

    def __repr__(self) -> str:
        return f"DatePeriodBase(start_date={self.start_date!r}, end_date={self.end_date!r})"


def _to_iso_string(dt: Optional[date]) -> Optional[str]:
    if dt is None:
        return None
    return f"{format_day(dt)}{_ISO_TIME_SUFFIX}"
