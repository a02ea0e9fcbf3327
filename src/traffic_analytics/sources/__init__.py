"""Session sources for Traffic Analytics.

Provides the collaborator protocol plus HTTP and in-memory implementations.
"""

from .base import SessionSource
from .errors import SessionSourceError, SessionSourceHTTPError, SessionSourceTimeoutError
from .http import HttpSessionSource
from .memory import InMemorySessionSource

__all__ = [
    "HttpSessionSource",
    "InMemorySessionSource",
    "SessionSource",
    "SessionSourceError",
    "SessionSourceHTTPError",
    "SessionSourceTimeoutError",
]
