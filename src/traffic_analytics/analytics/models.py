"""Data models for game-session analytics.

Defines the raw SessionRecord and the derived Interval and WeeklySeries
shapes handed to the chart layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

Timestamp = str | datetime

WEEKDAY_COUNT = 7


@dataclass(frozen=True)
class SessionRecord:
    """One observed game session.

    Attributes:
        instance_label: Opaque identifier of the game instance
        category: Category name the session belongs to
        start_time: When the session started (ISO-8601 string or datetime)
        end_time: When the session ended, None if still ongoing
    """

    instance_label: str | None
    category: str | None
    start_time: Timestamp | None
    end_time: Timestamp | None = None

    @property
    def is_ongoing(self) -> bool:
        """True if the session has no recorded end."""
        return self.end_time is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the backend wire shape."""
        return {
            "instance_name": self.instance_label,
            "category_name": self.category,
            "start_time": _wire_time(self.start_time),
            "end_time": _wire_time(self.end_time),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        """Create from a backend wire record.

        Missing keys map to None; timestamps are kept as received and only
        parsed by the builders.
        """
        return cls(
            instance_label=data.get("instance_name"),
            category=data.get("category_name"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
        )


def _wire_time(value: Timestamp | None) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class Interval:
    """A single instance's time span within a category."""

    instance_label: str | None
    start_millis: int
    end_millis: int
    color: str

    @property
    def duration_millis(self) -> int:
        return self.end_millis - self.start_millis


@dataclass
class WeeklySeries:
    """A category's session counts per weekday, Monday=0..Sunday=6."""

    name: str
    counts: list[int] = field(default_factory=lambda: [0] * WEEKDAY_COUNT)

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def is_empty(self) -> bool:
        return not any(count > 0 for count in self.counts)


__all__ = [
    "Interval",
    "SessionRecord",
    "Timestamp",
    "WEEKDAY_COUNT",
    "WeeklySeries",
]
