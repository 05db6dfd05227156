"""
Host-independent timeline controller.

Replays the host update cycle without any rendering: derives the data range
from raw row values, rebuilds the calendar and granularities when the
configuration or the data range changes, and keeps the selection split
against the current granularity.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Optional, Tuple, Union

from periodlib.calendars import (
    Calendar,
    CalendarFactory,
    GranularitySettings,
    GranularityType,
    PeriodDates,
    TimelineSettings,
    set_valid_calendar_settings,
)
from periodlib.granularity import (
    DatePeriodBase,
    ExtendedLabel,
    Granularity,
    GranularityData,
)
from periodlib.selection import (
    SelectionError,
    TimelineSelection,
    get_date_period,
    get_end_selection_date,
    get_start_selection_date,
    select_current_period,
    select_period,
    separate_selection,
    time_range_text,
    unseparate_selection,
)
from periodlib.utils.date import next_day, to_date

logger = logging.getLogger(__name__)

FilterPeriod = Union[DatePeriodBase, str, None]


class TimelineModel:
    """Calendar, granularities and selection of one timeline."""

    def __init__(self, calendar_factory: Optional[CalendarFactory] = None):
        self._calendar_factory = calendar_factory or CalendarFactory()

        self.settings: TimelineSettings = TimelineSettings()
        self.calendar: Optional[Calendar] = None
        self.granularity_data: Optional[GranularityData] = None
        self.selection: Optional[TimelineSelection] = None
        self.date_period: DatePeriodBase = DatePeriodBase.create_empty()

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def current_granularity(self) -> Optional[Granularity]:
        return self.selection.current_granularity if self.selection else None

    @property
    def selected_range(self) -> Optional[PeriodDates]:
        """Selected ``[start, end)`` dates, or None without data."""
        if self.selection is None:
            return None
        return PeriodDates(
            get_start_selection_date(self.selection),
            get_end_selection_date(self.selection),
        )

    @property
    def range_text(self) -> Optional[str]:
        if self.selection is None:
            return None
        return time_range_text(self.selection)

    @property
    def labels(self) -> Optional[ExtendedLabel]:
        granularity = self.current_granularity
        return granularity.get_extended_label() if granularity else None

    def clear(self) -> None:
        self.granularity_data = None
        self.selection = None
        self.date_period = DatePeriodBase.create_empty()

    # ------------------------------------------------------------------
    # Update cycle
    # ------------------------------------------------------------------
    def update(
        self,
        values: Any,
        settings: Optional[TimelineSettings] = None,
        filter_period: FilterPeriod = None,
        today: Optional[date] = None,
    ) -> None:
        """
        Apply new data and settings.

        Args:
            values: Raw per-row date values
            settings: Host configuration; defaults when omitted
            filter_period: Persisted selection, as a period or its JSON form
            today: Reference date for the current-period force selection
        """
        settings = settings or TimelineSettings()
        settings = replace(settings, calendar=set_valid_calendar_settings(settings.calendar))

        date_period = get_date_period(values)
        if date_period.is_empty:
            logger.debug("No dates in data; clearing timeline")
            self.settings = settings
            self.clear()
            return

        calendar_changed = self.calendar is None or self.calendar.is_changed(
            settings.calendar, settings.week_day, settings.week_standard
        )
        range_changed = date_period != self.date_period or self.granularity_data is None

        previous_range = self.selected_range if not range_changed else None

        if calendar_changed:
            self.calendar = self._calendar_factory.create(
                settings.week_standard, settings.calendar, settings.week_day
            )

        if calendar_changed or range_changed:
            logger.debug(
                "Rebuilding granularities for %s..%s (calendar changed: %s, range changed: %s)",
                date_period.start_date,
                date_period.end_date,
                calendar_changed,
                range_changed,
            )
            self.granularity_data = GranularityData(date_period.start_date, date_period.end_date)
            self.granularity_data.create_granularities(self.calendar)
            self.granularity_data.create_labels()
            # the previous periods are gone with the rebuild
            self.selection = None

        self.date_period = date_period
        self.settings = settings

        target = self._resolve_selection(settings, filter_period, today) or previous_range
        self._apply_selection(settings.granularity.granularity, target)

    def _resolve_selection(
        self,
        settings: TimelineSettings,
        filter_period: FilterPeriod,
        today: Optional[date],
    ) -> Optional[Tuple[date, date]]:
        if isinstance(filter_period, str):
            filter_period = DatePeriodBase.parse(filter_period)
        filter_period = filter_period or DatePeriodBase.create_empty()

        start_date = filter_period.start_date
        end_date = filter_period.end_date
        data_end = next_day(self.date_period.end_date)

        # filter bounds set by another slicer may exceed the data
        if start_date is not None and start_date < self.date_period.start_date:
            start_date = None
        if end_date is not None and end_date > data_end:
            end_date = None

        granularity_type = settings.granularity.granularity
        force = settings.force_selection
        forced = DatePeriodBase.create_empty()

        if force.current_period:
            forced = select_current_period(
                self.date_period, granularity_type, self.calendar, today
            )
        if force.latest_available_date and forced.is_empty:
            forced = select_period(
                self.date_period, granularity_type, self.calendar, self.date_period.end_date
            )

        if not forced.is_empty:
            return forced.start_date, forced.end_date
        if start_date is not None and end_date is not None and start_date < end_date:
            return start_date, end_date
        return None

    def _apply_selection(
        self,
        granularity_type: GranularityType,
        target: Optional[Tuple[date, date]],
    ) -> None:
        # Validate before the current split is merged
        if target is not None:
            target = (to_date(target[0]), to_date(target[1]))
            if target[0] >= target[1]:
                raise SelectionError(f"Empty selection: [{target[0]}, {target[1]})")

        if self.selection is not None:
            unseparate_selection(self.selection.date_periods)

        granularity = self.granularity_data.get_granularity(granularity_type)
        self.selection = TimelineSelection.full_range(granularity)

        if target is not None:
            separate_selection(self.selection, target[0], target[1])

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def select_range(self, start_date: date, end_date: date) -> None:
        """Select ``[start_date, end_date)`` on the current granularity."""
        if self.selection is None:
            raise ValueError("Timeline has no data to select from")
        self._apply_selection(
            self.current_granularity.get_type(), (to_date(start_date), to_date(end_date))
        )

    def change_granularity(self, granularity_type: GranularityType) -> None:
        """Switch the current granularity, keeping the selected dates."""
        if self.selection is None:
            raise ValueError("Timeline has no data to select from")

        granularity_type = GranularityType(granularity_type)
        if self.current_granularity.get_type() == granularity_type:
            return

        self._apply_selection(granularity_type, tuple(self.selected_range))
        self.settings = replace(
            self.settings, granularity=GranularitySettings(granularity=granularity_type)
        )
