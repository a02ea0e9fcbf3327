"""Timeline (range bar) dataset construction.

Folds raw session records into per-category interval lists for the
per-instance timeline chart.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime

from .colors import NEUTRAL_COLOR
from .models import Interval, SessionRecord
from .validation import to_millis

logger = logging.getLogger(__name__)

Timeline = dict[str, list[Interval]]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TimelineBuilder:
    """Builds category -> intervals mappings from session records.

    Records with an unparseable start or end are dropped with a warning;
    the rest of the batch is still processed. Sessions without an end are
    treated as running until "now", sampled once per build.
    """

    def __init__(
        self,
        fallback_color: str = NEUTRAL_COLOR,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            fallback_color: Color for categories missing from the color map
            clock: Source of the current instant for ongoing sessions
        """
        self._fallback_color = fallback_color
        self._clock = clock or _utc_now

    @property
    def fallback_color(self) -> str:
        return self._fallback_color

    def build(
        self,
        records: Iterable[SessionRecord],
        colors: Mapping[str, str],
        now: datetime | None = None,
    ) -> Timeline:
        """Group records into per-category interval lists.

        Args:
            records: Session records, in display order
            colors: Category name -> display color
            now: Instant substituted for missing end times. Defaults to clock.

        Returns:
            Mapping whose keys are categories in order of their first
            accepted record, each holding intervals in input order.
        """
        now_millis = to_millis(now or self._clock())

        order: list[str] = []
        groups: dict[str, list[Interval]] = {}

        for record in records:
            start_millis = to_millis(record.start_time)
            if record.end_time is None:
                end_millis = now_millis
            else:
                end_millis = to_millis(record.end_time)

            if start_millis is None or end_millis is None:
                logger.warning(
                    f"Invalid time for instance {record.instance_label}: "
                    f"start={record.start_time!r} end={record.end_time!r}"
                )
                continue

            category = record.category if record.category is not None else ""
            if category not in groups:
                order.append(category)
                groups[category] = []

            groups[category].append(
                Interval(
                    instance_label=record.instance_label,
                    start_millis=start_millis,
                    end_millis=end_millis,
                    color=colors.get(category) or self._fallback_color,
                )
            )

        return {category: groups[category] for category in order}


def interval_count(timeline: Timeline) -> int:
    """Total number of intervals across all categories."""
    return sum(len(intervals) for intervals in timeline.values())


__all__ = ["Timeline", "TimelineBuilder", "interval_count"]
