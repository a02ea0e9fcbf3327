"""Chart payload shaping.

Turns the derived datasets into the series structures the chart widgets
consume (range bar timeline and weekly bar chart). Nothing is rendered
here.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, tzinfo
from typing import Any

from traffic_analytics.analytics.colors import NEUTRAL_COLOR
from traffic_analytics.analytics.models import Interval, WeeklySeries
from traffic_analytics.analytics.timeline import Timeline
from traffic_analytics.analytics.weekly import weekday_totals

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def timeline_series(timeline: Timeline) -> list[dict[str, Any]]:
    """Range bar series, one per category, in timeline key order."""
    return [
        {
            "name": category,
            "data": [
                {
                    "x": interval.instance_label,
                    "y": [interval.start_millis, interval.end_millis],
                    "color": interval.color,
                }
                for interval in intervals
            ],
        }
        for category, intervals in timeline.items()
    ]


def weekly_series_payload(series: Iterable[WeeklySeries]) -> list[dict[str, Any]]:
    """Bar chart series, one per non-empty category."""
    return [{"name": item.name, "data": list(item.counts)} for item in series]


def weekly_colors(
    series: Iterable[WeeklySeries],
    colors: Mapping[str, str],
    fallback: str = NEUTRAL_COLOR,
) -> list[str]:
    """Colors aligned with the series actually shown."""
    return [colors.get(item.name) or fallback for item in series]


def weekly_chart(
    series: list[WeeklySeries],
    colors: Mapping[str, str],
    fallback: str = NEUTRAL_COLOR,
) -> dict[str, Any]:
    """Everything the weekly bar chart needs: labels, series and colors."""
    return {
        "labels": list(WEEKDAY_LABELS),
        "series": weekly_series_payload(series),
        "colors": weekly_colors(series, colors, fallback),
        "totals": weekday_totals(series),
    }


def _format_time(millis: int, tz: tzinfo | None) -> str:
    moment = datetime.fromtimestamp(millis / 1000, tz=UTC).astimezone(tz)
    return moment.strftime("%H:%M:%S")


def interval_tooltip(interval: Interval, tz: tzinfo | None = None) -> str:
    """Tooltip text for a timeline bar: instance, start and end time of day.

    Args:
        interval: Interval under the cursor
        tz: Zone the times are shown in. Defaults to the local zone.
    """
    return "\n".join(
        [
            f"Game Instance: {interval.instance_label}",
            f"Start Time: {_format_time(interval.start_millis, tz)}",
            f"End Time: {_format_time(interval.end_millis, tz)}",
        ]
    )


__all__ = [
    "WEEKDAY_LABELS",
    "interval_tooltip",
    "timeline_series",
    "weekly_chart",
    "weekly_colors",
    "weekly_series_payload",
]
