"""HTTP session source.

Fetches categories and session records from the analytics backend over
HTTP. Requests are made once; failures are raised to the caller, which
decides whether to keep its previous data.
"""

import logging
import time
from datetime import date
from typing import Any

import httpx

from traffic_analytics.analytics.models import SessionRecord

from .errors import SessionSourceError, SessionSourceHTTPError, SessionSourceTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 10.0  # seconds

CATEGORIES_PATH = "/categories"
SESSIONS_PATH = "/sessions"
WEEKLY_SESSIONS_PATH = "/sessions/weekly"


class HttpSessionSource:
    """Session source backed by the analytics HTTP API.

    Endpoints:
        GET /categories -> ["Combat", ...]
        GET /sessions?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD -> [record, ...]
        GET /sessions/weekly -> [record, ...]
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize HTTP source.

        Args:
            base_url: Backend API root URL
            timeout: Request timeout in seconds
            client: Pre-built client to use instead of one per request
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        logger.info(f"HTTP session source initialized (base_url: {self._base_url})")

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_distinct_categories(self) -> list[str]:
        """Fetch ordered category names."""
        data = self._get_json(CATEGORIES_PATH)
        if not isinstance(data, list):
            raise SessionSourceError(f"Expected a list of categories, got {type(data).__name__}")
        return [str(name) for name in data]

    def fetch_records(self, start_date: date, end_date: date) -> list[SessionRecord]:
        """Fetch records for a date range (inclusive)."""
        data = self._get_json(
            SESSIONS_PATH,
            params={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )
        return self._parse_records(data)

    def fetch_weekly_records(self) -> list[SessionRecord]:
        """Fetch records for the backend's trailing week."""
        return self._parse_records(self._get_json(WEEKLY_SESSIONS_PATH))

    def _parse_records(self, data: Any) -> list[SessionRecord]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise SessionSourceError(f"Expected a list of records, got {type(data).__name__}")
        return [SessionRecord.from_dict(item) for item in data if isinstance(item, dict)]

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Make a GET request and decode the JSON body.

        Raises:
            SessionSourceTimeoutError: If the request timed out
            SessionSourceHTTPError: If the backend returned an error status
            SessionSourceError: For other transport or decode failures
        """
        url = f"{self._base_url}{path}"
        start_time = time.time()

        try:
            if self._client is not None:
                response = self._client.get(url, params=params, timeout=self._timeout)
                response.raise_for_status()
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url, params=params)
                    response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException as e:
            raise SessionSourceTimeoutError(f"Request to {url} timed out: {e}") from e

        except httpx.HTTPStatusError as e:
            raise SessionSourceHTTPError(
                f"HTTP error {e.response.status_code} from {url}",
                status_code=e.response.status_code,
            ) from e

        except httpx.HTTPError as e:
            raise SessionSourceError(f"Request to {url} failed: {e}") from e

        except ValueError as e:
            raise SessionSourceError(f"Invalid JSON from {url}: {e}") from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"GET {path} completed in {elapsed_ms}ms")
        return data


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "HttpSessionSource",
]
