"""Feed HTTP Client - Imperative Shell.

Shared async GET for the public disaster feeds. Every failure is absorbed
into a FeedResult; nothing here raises to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 10.0


@dataclass
class FeedResult:
    """Outcome of one feed request.

    Attributes:
        source: Provider name
        success: Whether a usable JSON payload was received
        payload: Decoded JSON object (empty on failure)
        status_code: HTTP status code (0 if no response)
        error: Error message if failed
        skipped: True when the request was not attempted (circuit open)
    """
    source: str
    success: bool
    payload: dict[str, Any] = field(default_factory=dict)
    status_code: int = 0
    error: str | None = None
    skipped: bool = False

    @classmethod
    def failure(
        cls,
        source: str,
        error: str,
        status_code: int = 0,
        skipped: bool = False,
    ) -> "FeedResult":
        """Failed result with an empty payload."""
        return cls(
            source=source,
            success=False,
            status_code=status_code,
            error=error,
            skipped=skipped,
        )


class FeedClient:
    """Base client for an unauthenticated JSON feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    source = "feed"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            base_url: Feed endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def _get_json(self, params: dict[str, str]) -> FeedResult:
        """GET the feed and decode a JSON object.

        This method performs HTTP I/O.

        Args:
            params: URL query parameters

        Returns:
            FeedResult with the payload, or a failure with an empty payload
        """
        logger.info("Fetching %s feed", self.source, extra={"params": params})

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
                headers={"Accept": "application/json"},
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException:
            logger.error("%s feed request timed out", self.source)
            return FeedResult.failure(self.source, "Request timed out")
        except httpx.HTTPError as e:
            logger.error("%s feed request failed: %s", self.source, str(e))
            return FeedResult.failure(self.source, str(e))

        if not response.is_success:
            logger.warning(
                "%s feed returned non-success status: %d",
                self.source,
                response.status_code,
            )
            return FeedResult.failure(
                self.source,
                f"{self.source} API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("%s feed returned invalid JSON: %s", self.source, str(e))
            return FeedResult.failure(
                self.source,
                "Malformed response body",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            logger.warning(
                "%s feed returned %s instead of a JSON object",
                self.source,
                type(data).__name__,
            )
            return FeedResult.failure(
                self.source,
                "Malformed response body",
                status_code=response.status_code,
            )

        return FeedResult(
            source=self.source,
            success=True,
            payload=data,
            status_code=response.status_code,
        )
