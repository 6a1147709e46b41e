"""Alert Aggregator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing feed clients:

    fetch (concurrently) -> normalize -> merge -> rank -> (regional filter)

No state is kept between calls. Provider circuit states, when used, are
passed in by the caller and handed back updated.
"""

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from disaster_alerts.core.alert import SOURCE_EONET, SOURCE_USGS, Alert
from disaster_alerts.core.circuit import (
    CircuitState,
    is_open,
    record_failure,
    record_success,
)
from disaster_alerts.core.config import Config
from disaster_alerts.core.geo import Observer, bounds_around, make_observer
from disaster_alerts.core.normalizer import parse_eonet_events, parse_usgs_features
from disaster_alerts.core.ranking import rank_alerts
from disaster_alerts.core.regional import filter_regional
from disaster_alerts.shell.eonet_client import EONETClient
from disaster_alerts.shell.feed_client import FeedResult
from disaster_alerts.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    """Result of one aggregation pass.

    Attributes:
        alerts: Ranked, filtered alerts
        sources: Per-provider fetch outcome, keyed by source name
        circuits: Updated circuit state per source
        fetched_at: When the pass started (UTC)
    """
    alerts: list[Alert]
    sources: dict[str, FeedResult] = field(default_factory=dict)
    circuits: dict[str, CircuitState] = field(default_factory=dict)
    fetched_at: datetime | None = None

    @property
    def failed_sources(self) -> list[str]:
        """Sources that contributed nothing because of a failure."""
        return [name for name, r in self.sources.items() if not r.success]

    @property
    def all_failed(self) -> bool:
        """True when no provider answered, i.e. an empty list means nothing."""
        return bool(self.sources) and all(not r.success for r in self.sources.values())

    @property
    def summary(self) -> str:
        """Human-readable summary of the aggregation result."""
        ok = len(self.sources) - len(self.failed_sources)
        return (
            f"{len(self.alerts)} alerts from "
            f"{ok}/{len(self.sources)} sources"
        )


class AlertAggregator:
    """Fetches, normalizes and ranks alerts from both disaster feeds.

    This class wires together:
    - EONET client (satellite events)
    - USGS client (earthquakes)
    - Core functions (normalization, ranking, regional filtering)
    """

    def __init__(
        self,
        config: Config | None = None,
        eonet_client: EONETClient | None = None,
        usgs_client: USGSClient | None = None,
    ) -> None:
        """Initialize aggregator with configuration.

        Args:
            config: Application configuration (defaults if not provided)
            eonet_client: EONET client (created if not provided)
            usgs_client: USGS client (created if not provided)
        """
        self.config = config or Config()
        self.eonet_client = eonet_client or EONETClient(
            base_url=self.config.eonet_url,
            timeout=self.config.request_timeout_seconds,
        )
        self.usgs_client = usgs_client or USGSClient(
            base_url=self.config.usgs_url,
            timeout=self.config.request_timeout_seconds,
        )

    async def _guarded(
        self,
        source: str,
        coro: Awaitable[FeedResult],
    ) -> FeedResult:
        """Await a feed coroutine, turning a timeout or stray error into a failure."""
        try:
            return await asyncio.wait_for(
                coro,
                timeout=self.config.request_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                "%s feed did not answer within %.1fs",
                source,
                self.config.request_timeout_seconds,
            )
            return FeedResult.failure(source, "Request timed out")
        except Exception as e:
            logger.exception("Unexpected error fetching %s feed", source)
            return FeedResult.failure(source, str(e))

    async def _skipped(self, source: str) -> FeedResult:
        logger.warning("Skipping %s feed: circuit open", source)
        return FeedResult.failure(source, "Circuit open", skipped=True)

    def _fetch_eonet(self, observer: Observer | None) -> Awaitable[FeedResult]:
        if observer is not None:
            bounds = bounds_around(observer, self.config.observer_box_degrees)
        else:
            bounds = self.config.default_bounds

        return self.eonet_client.fetch_events(
            bounds,
            status=self.config.eonet_status,
            days=self.config.eonet_days,
        )

    def _fetch_usgs(self, now: datetime) -> Awaitable[FeedResult]:
        return self.usgs_client.fetch_recent(
            bounds=self.config.default_bounds,
            min_magnitude=self.config.min_magnitude,
            days=self.config.lookback_days,
            now=now,
        )

    async def _fetch_feeds(
        self,
        observer: Observer | None,
        circuits: Mapping[str, CircuitState],
        now: datetime,
    ) -> tuple[FeedResult, FeedResult]:
        """Fetch both feeds concurrently; neither failure affects the other."""
        circuit_config = self.config.circuit
        eonet_open = is_open(circuits.get(SOURCE_EONET, CircuitState()), circuit_config, now)
        usgs_open = is_open(circuits.get(SOURCE_USGS, CircuitState()), circuit_config, now)

        if eonet_open:
            eonet_task = self._skipped(SOURCE_EONET)
        else:
            eonet_task = self._guarded(SOURCE_EONET, self._fetch_eonet(observer))

        if usgs_open:
            usgs_task = self._skipped(SOURCE_USGS)
        else:
            usgs_task = self._guarded(SOURCE_USGS, self._fetch_usgs(now))

        eonet_result, usgs_result = await asyncio.gather(eonet_task, usgs_task)
        return eonet_result, usgs_result

    def _update_circuits(
        self,
        circuits: Mapping[str, CircuitState],
        results: list[FeedResult],
        now: datetime,
    ) -> dict[str, CircuitState]:
        updated = dict(circuits)
        for result in results:
            if result.skipped:
                continue
            state = updated.get(result.source, CircuitState())
            if result.success:
                updated[result.source] = record_success(state)
            else:
                updated[result.source] = record_failure(state, self.config.circuit, now)
        return updated

    async def fetch_alerts(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        radius_km: float | None = None,
        circuits: Mapping[str, CircuitState] | None = None,
        now: datetime | None = None,
    ) -> AggregationResult:
        """Run one aggregation pass and report per-provider outcomes.

        Never raises: provider failures contribute no alerts, and any other
        failure yields an empty result.

        Args:
            latitude: Observer latitude (needs longitude too)
            longitude: Observer longitude (needs latitude too)
            radius_km: Radius filter, defaults to config.default_radius_km
            circuits: Circuit state per source from the previous call
            now: Reference time, defaults to the current UTC time

        Returns:
            AggregationResult with ranked alerts
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if radius_km is None:
            radius_km = self.config.default_radius_km
        circuits = dict(circuits or {})

        try:
            observer = make_observer(latitude, longitude)
            logger.info(
                "Fetching all alerts for location: %s, %s (radius %.0f km)",
                latitude,
                longitude,
                radius_km,
            )

            eonet_result, usgs_result = await self._fetch_feeds(observer, circuits, now)

            # Distances are computed once, during ranking.
            merged = parse_eonet_events(
                eonet_result.payload,
                fetched_at=now,
                namespace_ids=self.config.namespace_ids,
            ) + parse_usgs_features(
                usgs_result.payload,
                fetched_at=now,
                namespace_ids=self.config.namespace_ids,
            )

            alerts = rank_alerts(merged, observer, radius_km)

            result = AggregationResult(
                alerts=alerts,
                sources={
                    eonet_result.source: eonet_result,
                    usgs_result.source: usgs_result,
                },
                circuits=self._update_circuits(
                    circuits, [eonet_result, usgs_result], now
                ),
                fetched_at=now,
            )
        except Exception:
            logger.exception("Unexpected error aggregating alerts")
            return AggregationResult(alerts=[], circuits=circuits, fetched_at=now)

        if result.failed_sources:
            logger.warning("Feeds failed: %s", ", ".join(result.failed_sources))
        logger.info("Completed: %s", result.summary)

        return result

    async def get_all_alerts(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        radius_km: float | None = None,
    ) -> list[Alert]:
        """Fetch all alerts near a point, ranked by severity then distance.

        Never raises; degrades to a partial or empty list.
        """
        result = await self.fetch_alerts(latitude, longitude, radius_km)
        return result.alerts

    async def get_regional_alerts(
        self,
        state: str,
        city: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> list[Alert]:
        """Fetch alerts relevant to a named region and city.

        Alerts are fetched with the regional radius, then kept when they are
        close by or mention the state/city in their title or address.
        """
        alerts = await self.get_all_alerts(
            latitude,
            longitude,
            self.config.regional_radius_km,
        )
        try:
            return filter_regional(
                alerts,
                state,
                city,
                proximity_km=self.config.regional_proximity_km,
            )
        except Exception:
            logger.exception("Failed to filter alerts for %s, %s", city, state)
            return []
