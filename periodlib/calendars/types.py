"""
Basic types, enums and settings used across the calendar system.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Type, TypeVar

from periodlib.utils.date import latest_day_of_month

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class WeekStandard(Enum):
    """Week numbering standards."""

    NOT_SET = "NOT_SET"
    ISO8601 = "ISO8601"


class Month(IntEnum):
    """Month indices as supplied by the host (January = 0)."""

    JANUARY = 0
    FEBRUARY = 1
    MARCH = 2
    APRIL = 3
    MAY = 4
    JUNE = 5
    JULY = 6
    AUGUST = 7
    SEPTEMBER = 8
    OCTOBER = 9
    NOVEMBER = 10
    DECEMBER = 11


class Weekday(IntEnum):
    """Weekday indices as supplied by the host (Sunday = 0)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class GranularityType(IntEnum):
    """Time bucket resolutions, ordered from the coarsest to the finest."""

    YEAR = 0
    QUARTER = 1
    MONTH = 2
    WEEK = 3
    DAY = 4


@dataclass(frozen=True)
class CalendarSettings:
    """Fiscal year start.

    Attributes:
        month: First month of the fiscal year (0-11)
        day: First day of the fiscal year (1-31), clamped by the caller
        fiscal_year_end_naming: Label a fiscal year that does not start on
            January 1st with the calendar year in which it ends
    """

    month: int = Month.JANUARY
    day: int = 1
    fiscal_year_end_naming: bool = False


@dataclass(frozen=True)
class WeekDaySettings:
    """First day of week; with ``day_selection`` off the fiscal start weekday is used."""

    day: int = Weekday.SUNDAY
    day_selection: bool = True


@dataclass(frozen=True)
class WeekStandardSettings:
    week_standard: WeekStandard = WeekStandard.NOT_SET


@dataclass(frozen=True)
class GranularitySettings:
    granularity: GranularityType = GranularityType.MONTH


@dataclass(frozen=True)
class ForceSelectionSettings:
    """Selections forced on every update, in priority order."""

    current_period: bool = False
    latest_available_date: bool = False


@dataclass(frozen=True)
class TimelineSettings:
    """All configuration primitives consumed from the host."""

    calendar: CalendarSettings = field(default_factory=CalendarSettings)
    week_day: WeekDaySettings = field(default_factory=WeekDaySettings)
    week_standard: WeekStandardSettings = field(default_factory=WeekStandardSettings)
    granularity: GranularitySettings = field(default_factory=GranularitySettings)
    force_selection: ForceSelectionSettings = field(default_factory=ForceSelectionSettings)

    @classmethod
    def from_objects(cls, objects: Optional[Mapping[str, Any]]) -> "TimelineSettings":
        """
        Parse a host objects mapping.

        Args:
            objects: Mapping such as ``{"calendar": {"month": 3, "day": 1},
                "weekDay": {"day": 1, "daySelection": True}, ...}``. Missing
                sections and keys fall back to defaults, unknown keys are ignored.

        Returns:
            Parsed settings
        """
        objects = objects or {}
        calendar = objects.get("calendar") or {}
        week_day = objects.get("weekDay") or {}
        week_standard = objects.get("weekStandard") or {}
        granularity = objects.get("granularity") or {}
        force_selection = objects.get("forceSelection") or {}

        defaults = cls()
        return cls(
            calendar=CalendarSettings(
                month=int(calendar.get("month", defaults.calendar.month)),
                day=int(calendar.get("day", defaults.calendar.day)),
                fiscal_year_end_naming=bool(
                    calendar.get("fiscalYearEnd", defaults.calendar.fiscal_year_end_naming)
                ),
            ),
            week_day=WeekDaySettings(
                day=int(week_day.get("day", defaults.week_day.day)),
                day_selection=bool(
                    week_day.get("daySelection", defaults.week_day.day_selection)
                ),
            ),
            week_standard=WeekStandardSettings(
                week_standard=_parse_enum(
                    WeekStandard,
                    week_standard.get("weekStandard"),
                    defaults.week_standard.week_standard,
                )
            ),
            granularity=GranularitySettings(
                granularity=_parse_enum(
                    GranularityType,
                    granularity.get("granularity"),
                    defaults.granularity.granularity,
                )
            ),
            force_selection=ForceSelectionSettings(
                current_period=bool(force_selection.get("currentPeriod", False)),
                latest_available_date=bool(force_selection.get("latestAvailableDate", False)),
            ),
        )


def _parse_enum(enum_cls: Type[E], raw: Any, default: E) -> E:
    """Accept an enum member, its name (any case) or its value."""
    if raw is None:
        return default
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls[raw.upper()]
        except KeyError:
            if raw.isdigit():
                raw = int(raw)
    try:
        return enum_cls(raw)
    except ValueError as exc:
        raise ValueError(f"Unknown {enum_cls.__name__}: {raw!r}") from exc


def set_valid_calendar_settings(settings: CalendarSettings) -> CalendarSettings:
    """Return settings whose day is clamped to the length of the configured month."""
    latest_day = latest_day_of_month(settings.month)
    day = max(1, min(latest_day, settings.day))
    if day != settings.day:
        logger.warning(
            "Fiscal start day %s clamped to %s for month index %s",
            settings.day,
            day,
            settings.month,
        )
        return replace(settings, day=day)
    return settings
