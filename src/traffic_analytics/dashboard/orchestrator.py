"""Dashboard state and fetch lifecycle.

Owns the three independent fetches (categories, date records, weekly
records) and re-derives the chart datasets through explicit, named
recomputation rules whenever one of their inputs changes.
"""

import logging
import threading
from collections.abc import Callable
from datetime import date
from enum import Enum
from zoneinfo import ZoneInfo

from traffic_analytics.analytics.colors import category_colors
from traffic_analytics.analytics.models import SessionRecord, WeeklySeries
from traffic_analytics.analytics.timeline import Timeline, TimelineBuilder
from traffic_analytics.analytics.validation import null_fields
from traffic_analytics.analytics.weekly import WeeklyAggregator
from traffic_analytics.config import TrafficConfig
from traffic_analytics.sources.base import SessionSource

logger = logging.getLogger(__name__)


class DateOption(Enum):
    """Which day the timeline shows."""

    DAILY = "daily"
    CUSTOM = "custom"


class TrafficDashboard:
    """Coordinates session fetches and derived chart datasets.

    Fetch failures are logged and leave the previously derived state in
    place. Fetches are not cancelled: when two fetches for the same input
    overlap, whichever finishes last wins.
    """

    def __init__(
        self,
        source: SessionSource,
        timeline_builder: TimelineBuilder | None = None,
        weekly_aggregator: WeeklyAggregator | None = None,
        today: Callable[[], date] | None = None,
        date_option: DateOption = DateOption.DAILY,
    ) -> None:
        """Initialize dashboard.

        Args:
            source: Collaborator for categories and records
            timeline_builder: Builder for the timeline dataset
            weekly_aggregator: Aggregator for the weekly dataset
            today: Returns the current local date for the daily view
            date_option: Initial date option
        """
        self._source = source
        self._timeline_builder = timeline_builder or TimelineBuilder()
        self._weekly_aggregator = weekly_aggregator or WeeklyAggregator()
        self._today = today or date.today
        self._lock = threading.RLock()

        self._date_option = date_option
        self._selected_date: date | None = None

        self._categories: list[str] = []
        self._category_colors: dict[str, str] = {}
        self._records: list[SessionRecord] = []
        self._weekly_records: list[SessionRecord] = []
        self._timeline: Timeline = {}
        self._weekly_series: list[WeeklySeries] = []

    @classmethod
    def from_config(cls, config: TrafficConfig, source: SessionSource) -> "TrafficDashboard":
        """Create a dashboard from configuration.

        Args:
            config: Loaded configuration
            source: Collaborator for categories and records

        Raises:
            ValueError: If the date option or timezone is unknown
        """
        tz = None
        if config.dashboard.timezone:
            try:
                tz = ZoneInfo(config.dashboard.timezone)
            except (KeyError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {config.dashboard.timezone}") from e

        return cls(
            source,
            timeline_builder=TimelineBuilder(fallback_color=config.dashboard.fallback_color),
            weekly_aggregator=WeeklyAggregator(tz=tz),
            date_option=DateOption(config.dashboard.default_date_option),
        )

    # Read-only derived state

    @property
    def categories(self) -> list[str]:
        return self._categories

    @property
    def category_colors(self) -> dict[str, str]:
        return self._category_colors

    @property
    def date_option(self) -> DateOption:
        return self._date_option

    @property
    def selected_date(self) -> date | None:
        return self._selected_date

    @property
    def records(self) -> list[SessionRecord]:
        return self._records

    @property
    def weekly_records(self) -> list[SessionRecord]:
        return self._weekly_records

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def weekly_series(self) -> list[WeeklySeries]:
        return self._weekly_series

    @property
    def active_date(self) -> date | None:
        """Day the timeline is showing, None if no custom date is chosen."""
        if self._date_option == DateOption.DAILY:
            return self._today()
        return self._selected_date

    # User actions

    def start(self) -> None:
        """Initial load: categories (and weekly data), then the timeline."""
        self.load_categories()
        self._on_date_selection_changed()

    def set_date_option(self, option: DateOption | str) -> None:
        """Switch between the daily and custom-date timeline.

        Raises:
            ValueError: If option is not a known date option
        """
        option = DateOption(option)
        with self._lock:
            if option == self._date_option:
                return
            self._date_option = option
        self._on_date_selection_changed()

    def set_selected_date(self, day: date | None) -> None:
        """Choose the day shown in custom mode."""
        with self._lock:
            if day == self._selected_date:
                return
            self._selected_date = day
        self._on_date_selection_changed()

    def refresh(self) -> None:
        """Re-run the category and record fetches concurrently.

        The weekly batch follows from the category fetch. Blocks until every
        fetch has committed or failed.
        """
        day = self.active_date
        jobs: list[Callable[[], bool]] = [self.load_categories]
        if day is not None:
            jobs.append(lambda: self.load_records(day))

        threads = [threading.Thread(target=job, daemon=True) for job in jobs]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    # Fetches

    def load_categories(self) -> bool:
        """Fetch the category list.

        Returns:
            True if the fetch succeeded and state was replaced
        """
        try:
            categories = self._source.get_distinct_categories()
        except Exception as e:
            logger.error(f"Error fetching categories: {e}")
            return False

        with self._lock:
            self._categories = list(categories or [])
        self._on_categories_changed()
        return True

    def load_records(self, day: date) -> bool:
        """Fetch the records for a single day.

        Returns:
            True if the fetch succeeded and state was replaced
        """
        try:
            records = self._source.fetch_records(day, day)
        except Exception as e:
            logger.error(f"Error fetching traffic data for {day.isoformat()}: {e}")
            return False

        records = list(records or [])
        self._log_null_fields(records, "daily")
        with self._lock:
            self._records = records
        self._on_records_changed()
        return True

    def load_weekly_records(self) -> bool:
        """Fetch the weekly record batch.

        Returns:
            True if the fetch succeeded and state was replaced
        """
        try:
            records = self._source.fetch_weekly_records()
        except Exception as e:
            logger.error(f"Error fetching weekly traffic data: {e}")
            return False

        records = list(records or [])
        self._log_null_fields(records, "weekly")
        with self._lock:
            self._weekly_records = records
        self._on_weekly_records_changed()
        return True

    # Recomputation rules

    def _on_categories_changed(self) -> None:
        """Category list changed: recolor, then refresh dependent data."""
        self._recompute_colors()
        self._recompute_timeline()
        # A successful weekly fetch re-aggregates through its own rule
        if not (self._categories and self.load_weekly_records()):
            self._recompute_weekly()

    def _on_records_changed(self) -> None:
        self._recompute_timeline()

    def _on_weekly_records_changed(self) -> None:
        self._recompute_weekly()

    def _on_date_selection_changed(self) -> None:
        """Date option or custom date changed: fetch the day to show."""
        day = self.active_date
        if day is not None:
            self.load_records(day)

    def _recompute_colors(self) -> None:
        with self._lock:
            self._category_colors = category_colors(self._categories)

    def _recompute_timeline(self) -> None:
        with self._lock:
            self._timeline = self._timeline_builder.build(self._records, self._category_colors)

    def _recompute_weekly(self) -> None:
        with self._lock:
            self._weekly_series = self._weekly_aggregator.build(
                self._categories, self._weekly_records
            )

    def _log_null_fields(self, records: list[SessionRecord], batch: str) -> None:
        """Report records carrying null fields (diagnostic only)."""
        for index, record in enumerate(records):
            missing = null_fields(record)
            if missing:
                logger.info(
                    f"Null value found in {batch} record at index {index} "
                    f"({', '.join(missing)}): {record}"
                )


__all__ = ["DateOption", "TrafficDashboard"]
