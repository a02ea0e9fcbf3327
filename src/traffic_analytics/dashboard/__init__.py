"""Dashboard module for Traffic Analytics.

Provides the fetch lifecycle and chart payloads for the timeline and
weekly charts.
"""

from .charts import (
    WEEKDAY_LABELS,
    interval_tooltip,
    timeline_series,
    weekly_chart,
    weekly_colors,
    weekly_series_payload,
)
from .orchestrator import DateOption, TrafficDashboard

__all__ = [
    "DateOption",
    "TrafficDashboard",
    "WEEKDAY_LABELS",
    "interval_tooltip",
    "timeline_series",
    "weekly_chart",
    "weekly_colors",
    "weekly_series_payload",
]
