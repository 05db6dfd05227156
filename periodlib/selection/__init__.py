"""Selection splitting and period selection."""

from periodlib.granularity.period import DatePeriodBase

from .select import (
    are_bounds_of_selection_and_available_dates_the_same,
    date_range_text,
    get_date_period,
    get_end_selection_date,
    get_end_selection_period,
    get_start_selection_date,
    is_granule_selected,
    select_current_period,
    select_period,
    time_range_text,
)
from .splitter import (
    FRACTION_TOLERANCE,
    EmptyPeriodsError,
    PendingSplitError,
    SelectionError,
    TimelineSelection,
    get_date_ratio,
    has_pending_split,
    is_fractional,
    separate_selection,
    unseparate_selection,
)

__all__ = [
    "DatePeriodBase",
    "EmptyPeriodsError",
    "FRACTION_TOLERANCE",
    "PendingSplitError",
    "SelectionError",
    "TimelineSelection",
    "are_bounds_of_selection_and_available_dates_the_same",
    "date_range_text",
    "get_date_period",
    "get_date_ratio",
    "get_end_selection_date",
    "get_end_selection_period",
    "get_start_selection_date",
    "has_pending_split",
    "is_fractional",
    "is_granule_selected",
    "select_current_period",
    "select_period",
    "separate_selection",
    "time_range_text",
    "unseparate_selection",
]
