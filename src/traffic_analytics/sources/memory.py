"""In-memory session source.

Serves categories and records from memory or a JSON dump. Used by the CLI
for offline inspection and by tests.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from traffic_analytics.analytics.models import SessionRecord
from traffic_analytics.analytics.validation import to_datetime

from .errors import SessionSourceError

logger = logging.getLogger(__name__)


class InMemorySessionSource:
    """Session source backed by in-memory lists.

    Weekly records are held separately from the date-range records, since
    the week window is decided by whoever produced the data.
    """

    def __init__(
        self,
        categories: list[str] | None = None,
        records: list[SessionRecord] | None = None,
        weekly_records: list[SessionRecord] | None = None,
    ) -> None:
        """Initialize source.

        Args:
            categories: Ordered category names
            records: Records served by date range
            weekly_records: Records served as the weekly batch
        """
        self.categories = list(categories or [])
        self.records = list(records or [])
        self.weekly_records = list(weekly_records or [])
        self._error_message: str | None = None
        self._call_count = 0

    @property
    def call_count(self) -> int:
        """Number of collaborator calls served (or failed)."""
        return self._call_count

    def set_error(self, message: str) -> None:
        """Make the next call raise SessionSourceError.

        Args:
            message: Error message
        """
        self._error_message = message

    def _check_error(self) -> None:
        self._call_count += 1
        if self._error_message is not None:
            message = self._error_message
            self._error_message = None
            raise SessionSourceError(message)

    def get_distinct_categories(self) -> list[str]:
        """Return categories in stored order."""
        self._check_error()
        return list(self.categories)

    def fetch_records(self, start_date: date, end_date: date) -> list[SessionRecord]:
        """Return records whose local start date is within the range."""
        self._check_error()
        selected: list[SessionRecord] = []
        for record in self.records:
            started = to_datetime(record.start_time)
            if started is None:
                # Let the builder decide what to do with it
                selected.append(record)
                continue
            if start_date <= started.date() <= end_date:
                selected.append(record)
        return selected

    def fetch_weekly_records(self) -> list[SessionRecord]:
        """Return the stored weekly batch."""
        self._check_error()
        return list(self.weekly_records)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InMemorySessionSource":
        """Create from a dump with categories, records and weekly_records."""
        return cls(
            categories=list(data.get("categories") or []),
            records=[SessionRecord.from_dict(item) for item in data.get("records") or []],
            weekly_records=[
                SessionRecord.from_dict(item) for item in data.get("weekly_records") or []
            ],
        )

    @classmethod
    def from_json_file(cls, path: Path) -> "InMemorySessionSource":
        """Load a source from a JSON dump file.

        Args:
            path: Path to the JSON file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object
        """
        if not path.exists():
            raise FileNotFoundError(f"Records file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Records file must contain a JSON object: {path}")

        source = cls.from_dict(data)
        logger.info(
            "Loaded %d categories, %d records, %d weekly records from %s",
            len(source.categories),
            len(source.records),
            len(source.weekly_records),
            path,
        )
        return source


__all__ = ["InMemorySessionSource"]
