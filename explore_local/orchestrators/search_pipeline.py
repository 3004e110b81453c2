"""Search cycle coordinator.

Runs the pipeline stages strictly in sequence for one location intent:

1. Resolve coordinate (device fix or geocoded city name)
2. Build the composite category query around it
3. Execute the query and normalise features into POIs
4. Enrich every POI concurrently (fan-out / fan-in)

Cycle staleness
---------------
Every call to ``search()`` takes the next value of a monotonically
increasing token before its first ``await``.  A cycle's result is
committed (stored as ``current_result`` and published to the sink)
only if its token is still the latest issued; results of superseded
cycles are discarded.  Everything runs on one event loop, so the token
comparison is the only synchronisation needed.

Failure policy
--------------
``LocationUnavailable``, ``PlaceNotFound``, ``GeocodingServiceError``
and ``SpatialQueryError`` end the cycle with an empty ``FAILED`` result
set; they never propagate out of ``search()``.  Enrichment failures are
absorbed per POI inside the enricher.  Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from explore_local.activities.build_query import build_query
from explore_local.activities.enrich_metadata import enrich_metadata
from explore_local.activities.execute_query import execute_query
from explore_local.activities.resolve_coordinate import PlaceNotFound, resolve_coordinate
from explore_local.core.config import ExploreConfig
from explore_local.core.constants import DEFAULT_SEARCH_RADIUS_M
from explore_local.models.result import CycleState, SearchResultSet
from explore_local.providers.base import (
    GeocodingServiceError,
    LocationUnavailable,
    SpatialQueryError,
)
from explore_local.providers.nominatim import NOMINATIM, NominatimAdapter
from explore_local.providers.overpass import OVERPASS, OverpassAdapter
from explore_local.providers.wikipedia import WIKIPEDIA, WikipediaAdapter
from explore_local.utils.helpers import build_provider_config

if TYPE_CHECKING:
    import httpx

    from explore_local.models.location import Coordinate, LocationIntent
    from explore_local.models.poi import POI
    from explore_local.orchestrators.sink import ResultSink
    from explore_local.providers.base import (
        Geocoder,
        GeodataProvider,
        KnowledgeProvider,
        LocationProvider,
    )

logger = logging.getLogger("explore_local.orchestrators.search_pipeline")

# Errors that degrade a cycle to an empty result instead of propagating.
CYCLE_FAILURES = (
    LocationUnavailable,
    PlaceNotFound,
    GeocodingServiceError,
    SpatialQueryError,
)


@dataclass(slots=True)
class SearchCycle:
    """Per-cycle context: token, intent and state-machine position.

    Attributes:
        token: Monotonic cycle token.
        intent: The location intent that started the cycle.
        state: Current state.
        history: Every state entered, in order (starts with ``IDLE``).
        center: Resolved search center, once known.
        committed: Whether the cycle's result reached the sink.
    """

    token: int
    intent: LocationIntent
    state: CycleState = CycleState.IDLE
    history: list[CycleState] = field(default_factory=lambda: [CycleState.IDLE])
    center: Coordinate | None = None
    committed: bool = False

    def advance(self, state: CycleState) -> None:
        self.state = state
        self.history.append(state)


class SearchCoordinator:
    """Owns the cycle token and the current result set.

    Args:
        geodata: Spatial query adapter.
        knowledge: Enrichment lookup adapter.
        geocoder: Geocoding adapter (for city searches).
        location_provider: Default device location adapter.
        sink: Consumer of committed results.
        radius_m: Search radius in metres.
    """

    def __init__(
        self,
        *,
        geodata: GeodataProvider,
        knowledge: KnowledgeProvider,
        geocoder: Geocoder | None = None,
        location_provider: LocationProvider | None = None,
        sink: ResultSink | None = None,
        radius_m: int = DEFAULT_SEARCH_RADIUS_M,
    ) -> None:
        self._geodata = geodata
        self._knowledge = knowledge
        self._geocoder = geocoder
        self._location_provider = location_provider
        self._sink = sink
        self._radius_m = radius_m
        self._latest_token = 0
        self._last_cycle: SearchCycle | None = None
        self._current_result: SearchResultSet | None = None
        self._selected: POI | None = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def latest_token(self) -> int:
        """Token of the most recently started cycle (0 before any search)."""
        return self._latest_token

    @property
    def current_result(self) -> SearchResultSet | None:
        """Result set of the latest committed cycle."""
        return self._current_result

    @property
    def last_cycle(self) -> SearchCycle | None:
        """Context of the most recently started cycle."""
        return self._last_cycle

    @property
    def selected(self) -> POI | None:
        return self._selected

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def search(
        self,
        intent: LocationIntent,
        *,
        location_provider: LocationProvider | None = None,
    ) -> SearchResultSet:
        """Run one search cycle for *intent*.

        Args:
            intent: Where to search.
            location_provider: Overrides the default device location
                adapter for this cycle only.

        Returns:
            The cycle's result set.  It is committed to the sink only if
            no newer search was started meanwhile.
        """
        cycle = self._begin(intent)
        logger.info("Search cycle started | token=%d | intent=%s", cycle.token, intent.describe())

        try:
            result = await self._run(cycle, location_provider or self._location_provider)
        except CYCLE_FAILURES as exc:
            exc.correlation_id = str(cycle.token)
            logger.warning(
                "Search cycle failed | token=%d | code=%s | error=%s",
                cycle.token,
                exc.code,
                exc,
            )
            cycle.advance(CycleState.FAILED)
            result = SearchResultSet.failed(cycle.token, exc, center=cycle.center)
        else:
            cycle.advance(CycleState.READY)

        self._commit(cycle, result)
        cycle.advance(CycleState.IDLE)
        return result

    def select_poi(self, poi_ref: int | str) -> POI | None:
        """Mark a POI of the current result as selected and focus the sink on it.

        Args:
            poi_ref: ``POI.key`` (``"way/42"``) or bare OSM id.

        Returns:
            The selected POI, or ``None`` if it is not in the current result.
        """
        if self._current_result is None:
            return None
        poi = self._current_result.find(poi_ref)
        if poi is None:
            return None
        self._selected = poi
        if self._sink is not None:
            self._sink.focus(poi)
        return poi

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _begin(self, intent: LocationIntent) -> SearchCycle:
        self._latest_token += 1
        cycle = SearchCycle(token=self._latest_token, intent=intent)
        self._last_cycle = cycle
        return cycle

    async def _run(
        self,
        cycle: SearchCycle,
        location_provider: LocationProvider | None,
    ) -> SearchResultSet:
        cycle.advance(CycleState.RESOLVING)
        center = await resolve_coordinate(
            cycle.intent,
            geocoder=self._geocoder,
            location_provider=location_provider,
        )
        cycle.center = center

        cycle.advance(CycleState.QUERYING)
        spec = build_query(center, self._radius_m)
        pois = await execute_query(spec, geodata=self._geodata)

        if not self.is_current(cycle.token):
            logger.debug("Skipping enrichment for superseded cycle | token=%d", cycle.token)
            return SearchResultSet.ready(cycle.token, pois, center)

        cycle.advance(CycleState.ENRICHING)
        await enrich_metadata(pois, knowledge=self._knowledge)
        return SearchResultSet.ready(cycle.token, pois, center)

    def _commit(self, cycle: SearchCycle, result: SearchResultSet) -> None:
        if not self.is_current(cycle.token):
            logger.debug(
                "Discarding stale result | token=%d | latest=%d",
                cycle.token,
                self._latest_token,
            )
            return

        self._current_result = result
        self._selected = None
        cycle.committed = True
        if self._sink is not None:
            self._sink.publish(result)
        logger.info(
            "Result committed | token=%d | status=%s | pois=%d",
            cycle.token,
            result.status.value,
            len(result),
        )


def build_coordinator(
    config: ExploreConfig | None = None,
    *,
    sink: ResultSink | None = None,
    location_provider: LocationProvider | None = None,
    client: httpx.AsyncClient | None = None,
) -> SearchCoordinator:
    """Wire the Nominatim, Overpass and Wikipedia adapters into a coordinator.

    Args:
        config: Pipeline configuration (defaults when ``None``).
        sink: Consumer of committed results.
        location_provider: Default device location adapter.
        client: Shared HTTP client for all adapters; each adapter opens
            its own short-lived client when ``None``.
    """
    config = config or ExploreConfig()
    return SearchCoordinator(
        geodata=OverpassAdapter(build_provider_config(OVERPASS, config), client=client),
        knowledge=WikipediaAdapter(build_provider_config(WIKIPEDIA, config), client=client),
        geocoder=NominatimAdapter(build_provider_config(NOMINATIM, config), client=client),
        location_provider=location_provider,
        sink=sink,
        radius_m=config.search_radius_m,
    )
