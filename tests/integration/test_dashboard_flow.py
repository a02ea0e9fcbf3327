"""Integration tests for the dashboard flow.

Tests an HTTP backend feeding the dashboard through to chart payloads.
"""

from datetime import UTC, date, datetime
from typing import Any

import httpx
import pytest

from traffic_analytics.analytics.colors import assign_color
from traffic_analytics.analytics.timeline import TimelineBuilder, interval_count
from traffic_analytics.analytics.weekly import WeeklyAggregator
from traffic_analytics.dashboard import (
    DateOption,
    TrafficDashboard,
    timeline_series,
    weekly_chart,
)
from traffic_analytics.sources import HttpSessionSource

NOW = datetime(2024, 5, 1, 18, 0, tzinfo=UTC)

CATEGORIES = ["Combat", "Racing", "Puzzle"]

DAY_RECORDS: list[dict[str, Any]] = [
    {
        "instance_name": "eu-1",
        "category_name": "Racing",
        "start_time": "2024-05-01T08:00:00Z",
        "end_time": "2024-05-01T09:00:00Z",
    },
    {
        "instance_name": "eu-2",
        "category_name": "Combat",
        "start_time": "2024-05-01T10:00:00Z",
        "end_time": None,
    },
    {
        "instance_name": "eu-3",
        "category_name": "Racing",
        "start_time": "2024-05-01T11:00:00Z",
        "end_time": "2024-05-01T11:45:00Z",
    },
    {
        "instance_name": "eu-4",
        "category_name": "Combat",
        "start_time": "corrupted",
        "end_time": "2024-05-01T12:00:00Z",
    },
]

WEEKLY_RECORDS: list[dict[str, Any]] = [
    {"instance_name": "a", "category_name": "Combat", "start_time": "2024-04-29T10:00:00Z", "end_time": None},
    {"instance_name": "b", "category_name": "Combat", "start_time": "2024-05-01T10:00:00Z", "end_time": None},
    {"instance_name": "c", "category_name": "Racing", "start_time": "2024-05-05T10:00:00Z", "end_time": None},
    {"instance_name": "d", "category_name": "Stealth", "start_time": "2024-05-02T10:00:00Z", "end_time": None},
]


class FakeBackend:
    """Serves the analytics API from canned data and records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.fail_categories = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/categories":
            if self.fail_categories:
                return httpx.Response(500, text="boom")
            return httpx.Response(200, json=CATEGORIES)
        if path == "/api/sessions/weekly":
            return httpx.Response(200, json=WEEKLY_RECORDS)
        if path == "/api/sessions":
            if request.url.params["start_date"] == "2024-05-01":
                return httpx.Response(200, json=DAY_RECORDS)
            return httpx.Response(200, json=[])
        return httpx.Response(404)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def dashboard(backend: FakeBackend) -> TrafficDashboard:
    client = httpx.Client(transport=httpx.MockTransport(backend))
    source = HttpSessionSource(base_url="http://testserver/api", client=client)
    return TrafficDashboard(
        source,
        timeline_builder=TimelineBuilder(clock=lambda: NOW),
        weekly_aggregator=WeeklyAggregator(tz=UTC),
        today=lambda: date(2024, 5, 1),
    )


@pytest.mark.integration
class TestDashboardFlow:
    """Test the complete fetch-to-payload workflow."""

    def test_start_to_payloads(self, dashboard: TrafficDashboard) -> None:
        """Initial load produces both chart payloads."""
        dashboard.start()

        # Timeline: categories in first-occurrence order, bad record dropped
        assert list(dashboard.timeline) == ["Racing", "Combat"]
        assert interval_count(dashboard.timeline) == 3

        series = timeline_series(dashboard.timeline)
        assert [point["x"] for point in series[0]["data"]] == ["eu-1", "eu-3"]
        ongoing = series[1]["data"][0]
        assert ongoing["y"][1] == int(NOW.timestamp()) * 1000
        assert ongoing["color"] == assign_color("Combat")

        # Weekly: category-list order, unknown category ignored, Puzzle dropped
        chart = weekly_chart(dashboard.weekly_series, dashboard.category_colors)
        assert chart["series"] == [
            {"name": "Combat", "data": [1, 0, 1, 0, 0, 0, 0]},
            {"name": "Racing", "data": [0, 0, 0, 0, 0, 0, 1]},
        ]
        assert chart["colors"] == [assign_color("Combat"), assign_color("Racing")]

    def test_custom_day_with_no_sessions(self, dashboard: TrafficDashboard) -> None:
        """Switching to an empty day clears the timeline."""
        dashboard.start()
        dashboard.set_date_option(DateOption.CUSTOM)
        dashboard.set_selected_date(date(2024, 4, 1))

        assert dashboard.timeline == {}
        # Weekly data is unaffected by the date selection
        assert len(dashboard.weekly_series) == 2

    def test_backend_error_keeps_previous_data(
        self, dashboard: TrafficDashboard, backend: FakeBackend
    ) -> None:
        """A failing category endpoint leaves the loaded dashboard intact."""
        dashboard.start()
        backend.fail_categories = True

        assert dashboard.load_categories() is False
        assert dashboard.categories == CATEGORIES
        assert len(dashboard.weekly_series) == 2

    def test_request_sequence(self, dashboard: TrafficDashboard, backend: FakeBackend) -> None:
        """Start hits categories, then weekly, then the day's sessions."""
        dashboard.start()

        assert [r.url.path for r in backend.requests] == [
            "/api/categories",
            "/api/sessions/weekly",
            "/api/sessions",
        ]
