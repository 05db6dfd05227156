"""Fiscal calendar and time-bucket engine for range selection.

This package partitions a contiguous date range into day, week, month,
quarter and year buckets under configurable fiscal-year and week-numbering
rules, and keeps fractional "split" periods in sync with an externally
imposed selection.

Key modules:
- calendars: fiscal and ISO 8601 calendars, settings and factory
- granularity: date periods, granularity variants and the orchestrator
- selection: selection splitting/merging and period selection helpers
- timeline: host-independent controller wiring everything together
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "calendars",
    "granularity",
    "selection",
    "timeline",
    "utils",
]
