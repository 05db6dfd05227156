"""Granularity metadata registry."""

from dataclasses import dataclass
from typing import Tuple

from periodlib.calendars.types import GranularityType


@dataclass(frozen=True)
class GranularityName:
    granularity_type: GranularityType
    name: str
    marker: str
    name_key: str


GRANULARITY_NAMES: Tuple[GranularityName, ...] = (
    GranularityName(GranularityType.YEAR, "year", "Y", "Visual_Granularity_Year"),
    GranularityName(GranularityType.QUARTER, "quarter", "Q", "Visual_Granularity_Quarter"),
    GranularityName(GranularityType.MONTH, "month", "M", "Visual_Granularity_Month"),
    GranularityName(GranularityType.WEEK, "week", "W", "Visual_Granularity_Week"),
    GranularityName(GranularityType.DAY, "day", "D", "Visual_Granularity_Day"),
)


def get_granularity_type(name: str) -> GranularityType:
    """Return the granularity type registered under ``name``."""
    for granularity in GRANULARITY_NAMES:
        if granularity.name == name.lower():
            return granularity.granularity_type
    raise ValueError(
        f"Unknown granularity: {name}. "
        f"Available: {[granularity.name for granularity in GRANULARITY_NAMES]}"
    )


def get_granularity_props_by_marker(marker: str) -> GranularityName:
    for granularity in GRANULARITY_NAMES:
        if granularity.marker == marker.upper():
            return granularity
    raise ValueError(f"Unknown granularity marker: {marker}")


def get_granularity_name_key(granularity_type: GranularityType) -> str:
    for granularity in GRANULARITY_NAMES:
        if granularity.granularity_type == granularity_type:
            return granularity.name_key
    raise ValueError(f"Unknown granularity type: {granularity_type}")
