"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; business logic is in the core module.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import httpx

from disaster_alerts.core.alert import SOURCE_USGS
from disaster_alerts.core.config import USGS_API_URL
from disaster_alerts.core.geo import BoundingBox
from disaster_alerts.shell.feed_client import DEFAULT_TIMEOUT, FeedClient, FeedResult


logger = logging.getLogger(__name__)


@dataclass
class USGSQueryParams:
    """Parameters for USGS API query.

    Attributes:
        bounds: Geographic bounding box (optional)
        min_magnitude: Minimum magnitude to fetch
        start_date: Fetch earthquakes from this date on
    """
    bounds: BoundingBox | None = None
    min_magnitude: float | None = None
    start_date: date | None = None


class USGSClient(FeedClient):
    """Client for fetching earthquake data from USGS API."""

    source = SOURCE_USGS

    def __init__(
        self,
        base_url: str = USGS_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, transport=transport)

    def _build_params(self, query: USGSQueryParams) -> dict[str, str]:
        """Build query parameters for USGS API request.

        Args:
            query: Query parameters

        Returns:
            Dict of URL query parameters
        """
        params: dict[str, str] = {
            "format": "geojson",
        }

        if query.start_date is not None:
            params["starttime"] = query.start_date.isoformat()

        if query.bounds is not None:
            params["minlatitude"] = str(query.bounds.min_latitude)
            params["maxlatitude"] = str(query.bounds.max_latitude)
            params["minlongitude"] = str(query.bounds.min_longitude)
            params["maxlongitude"] = str(query.bounds.max_longitude)

        if query.min_magnitude is not None:
            params["minmagnitude"] = str(query.min_magnitude)

        return params

    async def fetch_earthquakes(self, query: USGSQueryParams) -> FeedResult:
        """Fetch earthquake data from USGS API.

        This method performs HTTP I/O and never raises.

        Args:
            query: Query parameters

        Returns:
            FeedResult whose payload is the raw GeoJSON FeatureCollection
        """
        result = await self._get_json(self._build_params(query))

        if result.success:
            features = result.payload.get("features")
            logger.info(
                "Fetched %d earthquakes from USGS",
                len(features) if isinstance(features, list) else 0,
            )

        return result

    async def fetch_recent(
        self,
        bounds: BoundingBox | None = None,
        min_magnitude: float | None = 3.0,
        days: int = 30,
        now: datetime | None = None,
    ) -> FeedResult:
        """Convenience method to fetch earthquakes from the last N days.

        Args:
            bounds: Geographic bounds to filter by
            min_magnitude: Minimum magnitude
            days: How many days back to fetch (from today's date)
            now: Reference time, defaults to the current UTC time

        Returns:
            FeedResult with the raw GeoJSON
        """
        if now is None:
            now = datetime.now(timezone.utc)

        query = USGSQueryParams(
            bounds=bounds,
            min_magnitude=min_magnitude,
            start_date=(now - timedelta(days=days)).date(),
        )

        return await self.fetch_earthquakes(query)
