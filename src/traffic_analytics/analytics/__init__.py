"""Analytics module for game-session traffic.

Provides category colors, timeline intervals and weekly histograms.
"""

from .colors import NEUTRAL_COLOR, assign_color, category_colors
from .models import Interval, SessionRecord, WeeklySeries
from .timeline import Timeline, TimelineBuilder, interval_count
from .validation import null_fields, to_datetime, to_millis
from .weekly import WeeklyAggregator, sunday_first_to_monday_first, weekday_totals

__all__ = [
    "Interval",
    "NEUTRAL_COLOR",
    "SessionRecord",
    "Timeline",
    "TimelineBuilder",
    "WeeklyAggregator",
    "WeeklySeries",
    "assign_color",
    "category_colors",
    "interval_count",
    "null_fields",
    "sunday_first_to_monday_first",
    "to_datetime",
    "to_millis",
    "weekday_totals",
]
