"""Granularity module for partitioning date ranges into time buckets."""

from periodlib.calendars.types import GranularityType

from .base import Granularity
from .data import GranularityData
from .period import (
    DatePeriod,
    DatePeriodBase,
    ExtendedLabel,
    Identifier,
    TimelineLabel,
)
from .rules import GranularityRules, get_granularity_rules, short_month_name
from .types import (
    GRANULARITY_NAMES,
    GranularityName,
    get_granularity_name_key,
    get_granularity_props_by_marker,
    get_granularity_type,
)

__all__ = [
    # Periods and labels
    "DatePeriod",
    "DatePeriodBase",
    "ExtendedLabel",
    "Identifier",
    "TimelineLabel",
    # Granularities
    "Granularity",
    "GranularityData",
    "GranularityRules",
    "GranularityType",
    "get_granularity_rules",
    "short_month_name",
    # Registry
    "GRANULARITY_NAMES",
    "GranularityName",
    "get_granularity_name_key",
    "get_granularity_props_by_marker",
    "get_granularity_type",
]
