from datetime import date

import pytest

from periodlib.calendars import Calendar
from periodlib.granularity import DatePeriod, Granularity, GranularityData, GranularityType
from periodlib.selection import (
    EmptyPeriodsError,
    PendingSplitError,
    SelectionError,
    TimelineSelection,
    get_date_ratio,
    get_end_selection_date,
    get_start_selection_date,
    has_pending_split,
    separate_selection,
    unseparate_selection,
)


def _selection(granularity_type: GranularityType) -> TimelineSelection:
    data = GranularityData(date(2020, 1, 1), date(2020, 3, 31))
    data.create_granularities(Calendar())
    return TimelineSelection.full_range(data.get_granularity(granularity_type))


def _snapshot(selection: TimelineSelection):
    return [(p.start_date, p.end_date, p.fraction, p.index) for p in selection.date_periods]


def test_full_range_selection() -> None:
    selection = _selection(GranularityType.MONTH)

    assert (selection.selection_start_index, selection.selection_end_index) == (0, 2)
    assert get_start_selection_date(selection) == date(2020, 1, 1)
    assert get_end_selection_date(selection) == date(2020, 4, 1)


def test_get_date_ratio() -> None:
    february = DatePeriod(("Feb", 2016), date(2016, 2, 1), date(2016, 3, 1), (5, 2016), 2016)

    assert get_date_ratio(february, date(2016, 2, 7), True) == pytest.approx(0.2069, abs=1e-4)
    assert get_date_ratio(february, date(2016, 2, 7), False) == pytest.approx(0.7931, abs=1e-4)

    empty = DatePeriod(("Feb", 2016), date(2016, 2, 1), date(2016, 2, 1), (5, 2016), 2016)
    assert get_date_ratio(empty, date(2016, 2, 1), True) == 0


def test_separate_splits_both_boundary_periods() -> None:
    selection = _selection(GranularityType.MONTH)

    separate_selection(selection, date(2020, 1, 15), date(2020, 2, 20))
    periods = selection.date_periods

    assert len(periods) == 5
    assert (selection.selection_start_index, selection.selection_end_index) == (1, 2)
    assert get_start_selection_date(selection) == date(2020, 1, 15)
    assert get_end_selection_date(selection) == date(2020, 2, 20)

    assert periods[0].fraction == pytest.approx(14 / 31)
    assert periods[1].fraction == pytest.approx(17 / 31)
    assert periods[2].fraction == pytest.approx(19 / 29)
    assert periods[3].fraction == pytest.approx(10 / 29)
    assert periods[0].fraction + periods[1].fraction == pytest.approx(1.0)
    assert periods[2].fraction + periods[3].fraction == pytest.approx(1.0)

    assert [p.identifier_array for p in periods] == [
        ("Jan", 2020),
        ("Jan", 2020),
        ("Feb", 2020),
        ("Feb", 2020),
        ("Mar", 2020),
    ]
    indexes = [p.index for p in periods]
    assert indexes == sorted(indexes)
    assert periods[1].index == pytest.approx(14 / 31)
    assert periods[3].index == pytest.approx(1 + 19 / 29)
    assert has_pending_split(periods)


def test_unseparate_restores_the_periods() -> None:
    selection = _selection(GranularityType.MONTH)
    before = _snapshot(selection)

    separate_selection(selection, date(2020, 1, 15), date(2020, 2, 20))
    merges = unseparate_selection(selection.date_periods)

    assert merges == 2
    assert _snapshot(selection) == before
    assert not has_pending_split(selection.date_periods)


def test_split_inside_a_single_period() -> None:
    selection = _selection(GranularityType.MONTH)

    separate_selection(selection, date(2020, 2, 5), date(2020, 2, 20))
    periods = selection.date_periods

    assert len(periods) == 5
    assert (selection.selection_start_index, selection.selection_end_index) == (2, 2)
    assert (periods[2].start_date, periods[2].end_date) == (date(2020, 2, 5), date(2020, 2, 20))
    assert periods[1].fraction + periods[2].fraction + periods[3].fraction == pytest.approx(1.0)
    assert periods[2].fraction == pytest.approx(15 / 29)

    assert unseparate_selection(periods) == 2
    assert len(periods) == 3
    assert periods[1].fraction == 1.0


def test_selection_on_period_boundaries_does_not_split() -> None:
    selection = _selection(GranularityType.MONTH)

    separate_selection(selection, date(2020, 2, 1), date(2020, 3, 1))

    assert len(selection.date_periods) == 3
    assert (selection.selection_start_index, selection.selection_end_index) == (1, 1)
    assert unseparate_selection(selection.date_periods) == 0


def test_day_periods_are_never_split() -> None:
    selection = _selection(GranularityType.DAY)

    separate_selection(selection, "2020-01-15", "2020-02-20")

    assert len(selection.date_periods) == 91
    assert get_start_selection_date(selection) == date(2020, 1, 15)
    assert get_end_selection_date(selection) == date(2020, 2, 20)


def test_selection_outside_the_data_is_clamped() -> None:
    selection = _selection(GranularityType.MONTH)

    separate_selection(selection, date(2019, 12, 1), date(2020, 6, 1))

    assert len(selection.date_periods) == 3
    assert (selection.selection_start_index, selection.selection_end_index) == (0, 2)


def test_year_split_keeps_fractions_within_bucket() -> None:
    selection = _selection(GranularityType.YEAR)

    separate_selection(selection, date(2020, 1, 15), date(2020, 2, 20))
    periods = selection.date_periods

    assert len(periods) == 3
    assert (selection.selection_start_index, selection.selection_end_index) == (1, 1)
    assert sum(p.fraction for p in periods) == pytest.approx(1.0)
    assert all(0 < p.fraction < 1 for p in periods)


@pytest.mark.parametrize(
    "start_date, end_date",
    [
        (date(2020, 2, 1), date(2020, 2, 1)),
        (date(2020, 2, 20), date(2020, 1, 15)),
    ],
)
def test_empty_selection_is_rejected(start_date, end_date) -> None:
    selection = _selection(GranularityType.MONTH)

    with pytest.raises(SelectionError):
        separate_selection(selection, start_date, end_date)
    assert len(selection.date_periods) == 3


def test_second_split_requires_unseparate() -> None:
    selection = _selection(GranularityType.MONTH)
    separate_selection(selection, date(2020, 1, 15), date(2020, 2, 20))

    with pytest.raises(PendingSplitError):
        separate_selection(selection, date(2020, 1, 10), date(2020, 2, 10))

    unseparate_selection(selection.date_periods)
    separate_selection(selection, date(2020, 1, 10), date(2020, 2, 10))
    assert get_start_selection_date(selection) == date(2020, 1, 10)


def test_empty_granularity_is_rejected() -> None:
    selection = TimelineSelection(Granularity(GranularityType.MONTH, Calendar()))

    with pytest.raises(EmptyPeriodsError):
        separate_selection(selection, date(2020, 1, 1), date(2020, 2, 1))


def test_unseparate_rejects_orphan_fraction() -> None:
    periods = [
        DatePeriod(("Jan", 2020), date(2020, 1, 1), date(2020, 1, 15), (1, 2020), 2020, fraction=0.5),
        DatePeriod(("Feb", 2020), date(2020, 2, 1), date(2020, 3, 1), (6, 2020), 2020, index=1),
    ]

    with pytest.raises(SelectionError):
        unseparate_selection(periods)
