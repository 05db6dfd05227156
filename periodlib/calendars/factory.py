"""
Factory functions for creating calendars.
"""

from typing import Callable, Dict, Optional

from .calendar import Calendar
from .iso8601 import ISO8601Calendar
from .types import (
    CalendarSettings,
    WeekDaySettings,
    WeekStandard,
    WeekStandardSettings,
)

CalendarBuilder = Callable[[CalendarSettings, WeekDaySettings], Calendar]

_REGISTRY: Dict[WeekStandard, CalendarBuilder] = {
    WeekStandard.NOT_SET: Calendar,
    WeekStandard.ISO8601: lambda calendar_settings, week_day_settings: ISO8601Calendar(),
}


def create_calendar(
    week_standard_settings: Optional[WeekStandardSettings] = None,
    calendar_settings: Optional[CalendarSettings] = None,
    week_day_settings: Optional[WeekDaySettings] = None,
) -> Calendar:
    """
    Create the calendar matching a week standard.

    Args:
        week_standard_settings: Week numbering standard; ISO 8601 ignores the
            other settings
        calendar_settings: Fiscal year start, expected to be clamped already
        week_day_settings: First day of week

    Returns:
        A new calendar instance
    """
    week_standard = (
        week_standard_settings.week_standard
        if week_standard_settings is not None
        else WeekStandard.NOT_SET
    )
    try:
        builder = _REGISTRY[week_standard]
    except KeyError as exc:
        raise ValueError(
            f"Unknown week standard: {week_standard}. "
            f"Available: {[standard.name for standard in _REGISTRY]}"
        ) from exc

    return builder(
        calendar_settings or CalendarSettings(),
        week_day_settings or WeekDaySettings(),
    )


class CalendarFactory:
    """Stateless selector of the calendar variant for a week standard."""

    def create(
        self,
        week_standard_settings: Optional[WeekStandardSettings],
        calendar_settings: Optional[CalendarSettings],
        week_day_settings: Optional[WeekDaySettings],
    ) -> Calendar:
        return create_calendar(week_standard_settings, calendar_settings, week_day_settings)
