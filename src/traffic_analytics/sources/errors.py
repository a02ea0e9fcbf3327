"""Error types for session sources.

Raised when a collaborator call for categories or records fails.
"""


class SessionSourceError(Exception):
    """Base exception for session source failures."""

    pass


class SessionSourceTimeoutError(SessionSourceError):
    """Raised when the backend does not answer in time."""

    pass


class SessionSourceHTTPError(SessionSourceError):
    """Raised when the backend returns an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize HTTP error.

        Args:
            message: Error message.
            status_code: HTTP status code if available.
        """
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "SessionSourceError",
    "SessionSourceHTTPError",
    "SessionSourceTimeoutError",
]
