"""Configuration module for Traffic Analytics.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass, field


@dataclass
class BackendConfig:
    """Analytics backend connection configuration."""

    base_url: str = "http://localhost:8080/api"
    timeout: float = 10.0


@dataclass
class DashboardConfig:
    """Dashboard behavior configuration."""

    default_date_option: str = "daily"
    fallback_color: str = "#CCCCCC"
    timezone: str | None = None  # None = local zone


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class TrafficConfig:
    """Main Traffic Analytics configuration."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Public API
__all__ = [
    "BackendConfig",
    "DashboardConfig",
    "LoggingConfig",
    "TrafficConfig",
]
