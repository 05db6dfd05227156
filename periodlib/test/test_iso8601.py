from datetime import date, timedelta

import pytest

from periodlib.calendars import (
    Calendar,
    CalendarFactory,
    CalendarSettings,
    ISO8601Calendar,
    Month,
    WeekDaySettings,
    Weekday,
    WeekStandard,
    WeekStandardSettings,
    create_calendar,
)


@pytest.mark.parametrize(
    "year, expected",
    [
        (2015, date(2014, 12, 29)),
        (2016, date(2016, 1, 4)),
        (2020, date(2019, 12, 30)),
        (2021, date(2021, 1, 4)),
        (2026, date(2025, 12, 29)),
    ],
)
def test_date_of_first_week(year: int, expected: date) -> None:
    calendar = ISO8601Calendar()

    assert calendar.get_date_of_first_week(year) == expected
    assert calendar.get_date_of_first_full_week(year) == expected


@pytest.mark.parametrize("year", list(range(2010, 2030)))
def test_year_boundary_weeks_match_isocalendar(year: int) -> None:
    calendar = ISO8601Calendar()
    boundary = [date(year, 12, day) for day in (28, 29, 30, 31)]
    boundary += [date(year + 1, 1, day) for day in (1, 2, 3, 4)]

    for dt in boundary:
        iso_year, iso_week, _ = dt.isocalendar()
        assert calendar.determine_week(dt) == (iso_week, iso_year), dt


def test_whole_years_match_isocalendar() -> None:
    calendar = ISO8601Calendar()
    dt = date(2019, 1, 1)
    while dt <= date(2021, 12, 31):
        iso_year, iso_week, _ = dt.isocalendar()
        assert calendar.determine_week(dt) == (iso_week, iso_year), dt
        dt += timedelta(days=1)


def test_iso_weeks_run_monday_to_sunday() -> None:
    calendar = ISO8601Calendar()

    assert calendar.get_first_day_of_week() == Weekday.MONDAY
    assert calendar.get_week_period(date(2021, 1, 3)) == (date(2020, 12, 28), date(2021, 1, 4))
    assert calendar.determine_year(date(2021, 1, 3)) == 2021
    assert calendar.determine_week_year(date(2021, 1, 3)) == 2020


def test_iso_is_changed_only_by_the_week_standard() -> None:
    calendar = ISO8601Calendar()
    iso = WeekStandardSettings(WeekStandard.ISO8601)

    assert not calendar.is_changed(CalendarSettings(month=Month.MAY, day=3), WeekDaySettings(), iso)
    assert calendar.is_changed(CalendarSettings(), WeekDaySettings(), WeekStandardSettings())
    assert calendar.is_changed(CalendarSettings(), WeekDaySettings(), None)


def test_factory_selects_the_variant() -> None:
    calendar_settings = CalendarSettings(month=Month.APRIL, day=1)
    week_day_settings = WeekDaySettings(day=Weekday.MONDAY)

    calendar = create_calendar(WeekStandardSettings(), calendar_settings, week_day_settings)
    assert type(calendar) is Calendar
    assert calendar.get_first_month_of_year() == Month.APRIL
    assert calendar.get_first_day_of_week() == Weekday.MONDAY

    iso_calendar = CalendarFactory().create(
        WeekStandardSettings(WeekStandard.ISO8601), calendar_settings, week_day_settings
    )
    assert isinstance(iso_calendar, ISO8601Calendar)
    # ISO 8601 ignores the fiscal settings
    assert iso_calendar.get_first_month_of_year() == Month.JANUARY
    assert iso_calendar.get_first_day_of_year() == 1


def test_factory_defaults() -> None:
    calendar = create_calendar()

    assert type(calendar) is Calendar
    assert calendar.get_first_day_of_week() == Weekday.SUNDAY
    assert calendar.is_day_selection()


def test_factory_rejects_unknown_standard() -> None:
    with pytest.raises(ValueError, match="Unknown week standard"):
        create_calendar(WeekStandardSettings("US"))
