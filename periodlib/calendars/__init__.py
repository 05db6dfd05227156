# Re-export calendar components
from .calendar import Calendar, PeriodDates, WeekId
from .factory import CalendarFactory, create_calendar
from .iso8601 import ISO8601Calendar
from .types import (
    CalendarSettings,
    ForceSelectionSettings,
    GranularitySettings,
    GranularityType,
    Month,
    TimelineSettings,
    WeekDaySettings,
    Weekday,
    WeekStandard,
    WeekStandardSettings,
    set_valid_calendar_settings,
)

__all__ = [
    "Calendar",
    "CalendarFactory",
    "CalendarSettings",
    "ForceSelectionSettings",
    "GranularitySettings",
    "GranularityType",
    "ISO8601Calendar",
    "Month",
    "PeriodDates",
    "TimelineSettings",
    "WeekDaySettings",
    "WeekId",
    "Weekday",
    "WeekStandard",
    "WeekStandardSettings",
    "create_calendar",
    "set_valid_calendar_settings",
]
