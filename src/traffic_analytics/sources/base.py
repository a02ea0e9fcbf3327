"""Collaborator protocol for session data."""

from datetime import date
from typing import Protocol

from traffic_analytics.analytics.models import SessionRecord


class SessionSource(Protocol):
    """Protocol for fetching categories and session records."""

    def get_distinct_categories(self) -> list[str]:
        """Get ordered, unique category names."""
        ...

    def fetch_records(self, start_date: date, end_date: date) -> list[SessionRecord]:
        """Get records whose sessions start within the date range."""
        ...

    def fetch_weekly_records(self) -> list[SessionRecord]:
        """Get records for the backend-defined trailing week."""
        ...


__all__ = ["SessionSource"]
