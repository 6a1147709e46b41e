"""NASA EONET Client - Imperative Shell.

This module handles HTTP communication with the NASA Earth Observatory
Natural Event Tracker (satellite event feed). Parsing lives in the core.
"""

import logging

import httpx

from disaster_alerts.core.alert import SOURCE_EONET
from disaster_alerts.core.config import EONET_API_URL
from disaster_alerts.core.geo import BoundingBox
from disaster_alerts.shell.feed_client import DEFAULT_TIMEOUT, FeedClient, FeedResult


logger = logging.getLogger(__name__)


class EONETClient(FeedClient):
    """Client for fetching open natural events from NASA EONET."""

    source = SOURCE_EONET

    def __init__(
        self,
        base_url: str = EONET_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, transport=transport)

    @staticmethod
    def build_params(
        bounds: BoundingBox,
        status: str = "open",
        days: int = 30,
    ) -> dict[str, str]:
        """Build query parameters for an EONET events request."""
        return {
            "bbox": bounds.to_bbox_param(),
            "status": status,
            "days": str(days),
        }

    async def fetch_events(
        self,
        bounds: BoundingBox,
        status: str = "open",
        days: int = 30,
    ) -> FeedResult:
        """Fetch events inside a bounding box.

        This method performs HTTP I/O and never raises.

        Args:
            bounds: Area to search
            status: Event status filter ("open", "closed" or "all")
            days: Lookback window in days

        Returns:
            FeedResult whose payload is the raw ``{"events": [...]}`` response
        """
        result = await self._get_json(self.build_params(bounds, status, days))

        if result.success:
            events = result.payload.get("events")
            logger.info(
                "Fetched %d events from EONET",
                len(events) if isinstance(events, list) else 0,
            )

        return result
