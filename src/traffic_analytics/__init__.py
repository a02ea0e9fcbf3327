"""Traffic Analytics - game-session dashboards.

Traffic Analytics turns recorded game sessions into:
- A per-instance timeline grouped by category
- A weekly per-category histogram of session starts
- Stable, name-derived category colors

Usage:
    python -m traffic_analytics --profile dev
    python -m traffic_analytics --records sessions.json --date 2024-05-01
"""

__version__ = "0.1.0"

from .config import TrafficConfig
from .config.loader import load_config

__all__ = [
    "TrafficConfig",
    "__version__",
    "load_config",
]
