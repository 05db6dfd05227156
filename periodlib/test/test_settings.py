import pytest

from periodlib.calendars import (
    CalendarSettings,
    GranularityType,
    Month,
    TimelineSettings,
    Weekday,
    WeekStandard,
)


def test_from_objects_defaults() -> None:
    assert TimelineSettings.from_objects(None) == TimelineSettings()
    assert TimelineSettings.from_objects({}) == TimelineSettings()

    settings = TimelineSettings()
    assert settings.calendar == CalendarSettings(month=Month.JANUARY, day=1)
    assert settings.week_day.day == Weekday.SUNDAY
    assert settings.week_day.day_selection
    assert settings.week_standard.week_standard == WeekStandard.NOT_SET
    assert settings.granularity.granularity == GranularityType.MONTH
    assert not settings.force_selection.current_period


def test_from_objects_reads_host_keys() -> None:
    settings = TimelineSettings.from_objects(
        {
            "calendar": {"month": 3, "day": 15, "fiscalYearEnd": True},
            "weekDay": {"day": 1, "daySelection": False},
            "weekStandard": {"weekStandard": "iso8601"},
            "granularity": {"granularity": "week"},
            "forceSelection": {"currentPeriod": True, "latestAvailableDate": True},
            "unknown": {"key": 1},
        }
    )

    assert settings.calendar == CalendarSettings(month=3, day=15, fiscal_year_end_naming=True)
    assert settings.week_day.day == Weekday.MONDAY
    assert not settings.week_day.day_selection
    assert settings.week_standard.week_standard == WeekStandard.ISO8601
    assert settings.granularity.granularity == GranularityType.WEEK
    assert settings.force_selection.current_period
    assert settings.force_selection.latest_available_date


@pytest.mark.parametrize("raw", [4, "4", "DAY", "day", GranularityType.DAY])
def test_from_objects_granularity_forms(raw) -> None:
    settings = TimelineSettings.from_objects({"granularity": {"granularity": raw}})

    assert settings.granularity.granularity == GranularityType.DAY


def test_from_objects_rejects_unknown_granularity() -> None:
    with pytest.raises(ValueError, match="GranularityType"):
        TimelineSettings.from_objects({"granularity": {"granularity": "fortnight"}})
