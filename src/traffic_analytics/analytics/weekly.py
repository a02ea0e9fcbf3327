"""Weekly per-category histogram construction.

Counts session starts per weekday for each known category.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import tzinfo

from .models import WEEKDAY_COUNT, SessionRecord, WeeklySeries
from .validation import to_datetime

logger = logging.getLogger(__name__)


def sunday_first_to_monday_first(day: int) -> int:
    """Remap a Sunday=0..Saturday=6 weekday to Monday=0..Sunday=6."""
    return 6 if day == 0 else day - 1


class WeeklyAggregator:
    """Aggregates session starts into Monday..Sunday count vectors.

    Series follow the order of the authoritative category list. Records
    whose category is not in that list are ignored, as are records whose
    start cannot be parsed. Categories with no sessions are dropped.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        """Initialize aggregator.

        Args:
            tz: Zone the weekday is evaluated in. Defaults to the local zone.
        """
        self._tz = tz

    def build(
        self,
        categories: Sequence[str],
        records: Iterable[SessionRecord],
    ) -> list[WeeklySeries]:
        """Count records per category and start weekday.

        Args:
            categories: Ordered, unique category names
            records: Session records for the week window

        Returns:
            Non-empty series in category order
        """
        series = [WeeklySeries(name=category) for category in categories]
        index_of = {category: i for i, category in enumerate(categories)}

        for record in records:
            position = index_of.get(record.category) if record.category is not None else None
            if position is None:
                continue

            started = to_datetime(record.start_time, self._tz)
            if started is None:
                logger.debug(
                    f"Ignoring weekly record for {record.instance_label} "
                    f"with unparseable start {record.start_time!r}"
                )
                continue

            # datetime.weekday() is already Monday=0..Sunday=6
            day = started.weekday()
            series[position].counts[day] += 1

        return [item for item in series if not item.is_empty]


def weekday_totals(series: Iterable[WeeklySeries]) -> list[int]:
    """Sum counts across series per weekday."""
    totals = [0] * WEEKDAY_COUNT
    for item in series:
        for day, count in enumerate(item.counts):
            totals[day] += count
    return totals


__all__ = ["WeeklyAggregator", "sunday_first_to_monday_first", "weekday_totals"]
