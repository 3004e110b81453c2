"""External service adapter contracts.

Defines the interfaces the pipeline talks to.  The activities interact
exclusively with these abstract classes and never see which concrete
service is behind them. Tests swap in in-memory fakes.

Adapters:
    - ``LocationProvider``: one-shot device position fix.
    - ``Geocoder``: free-text place name to ranked coordinates.
    - ``GeodataProvider``: composite spatial query to raw features.
    - ``KnowledgeProvider``: free-text search to page summary.

HTTP-backed adapters derive from ``HttpAdapter``, which owns the
``httpx.AsyncClient`` lifecycle: a shared client may be injected (one
connection pool for a whole search cycle), otherwise a short-lived
client is opened per call.
"""

from __future__ import annotations

import abc
import contextlib
from typing import TYPE_CHECKING

import httpx

from explore_local.core.exceptions import ContractError, ExploreError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from explore_local.models.location import Coordinate, GeocodeCandidate
    from explore_local.models.poi import PageSummary, RawFeature
    from explore_local.models.provider import ProviderConfig
    from explore_local.models.query import QuerySpec


# ---------------------------------------------------------------------------
# Adapter interfaces
# ---------------------------------------------------------------------------


class LocationProvider(abc.ABC):
    """Platform location provider (e.g. browser geolocation)."""

    @abc.abstractmethod
    async def locate(self) -> Coordinate:
        """Request a single position fix.

        Raises:
            LocationUnavailable: If the provider denies or fails the request.
        """


class Geocoder(abc.ABC):
    """Geocoding lookup service."""

    @abc.abstractmethod
    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        """Return candidates for *query* in the service's ranking order.

        Returns:
            Possibly empty list, best match first.

        Raises:
            GeocodingServiceError: On transport or response-parse failure.
        """


class GeodataProvider(abc.ABC):
    """Spatial query service over tagged map features."""

    @abc.abstractmethod
    async def query(self, spec: QuerySpec) -> list[RawFeature]:
        """Execute *spec* as a single request.

        Returns:
            Features in the service's response order.

        Raises:
            SpatialQueryError: On transport or response-parse failure.
        """


class KnowledgeProvider(abc.ABC):
    """Encyclopedia-style lookup service."""

    @abc.abstractmethod
    async def lookup(self, search_term: str) -> PageSummary | None:
        """Return the top-ranked page for *search_term*, or ``None`` if no page matches.

        Raises:
            EnrichmentLookupError: On transport or response-parse failure.
        """


class HttpAdapter:
    """Mixin for adapters that call an HTTP API through ``httpx``."""

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client

    @property
    def name(self) -> str:
        """Return the adapter name from configuration."""
        return self._config.name

    @property
    def config(self) -> ProviderConfig:
        """Return the adapter configuration (read-only)."""
        return self._config

    @contextlib.asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a fresh one closed on exit."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self._config.timeout_s,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
        ) as client:
            yield client

    @property
    def _headers(self) -> dict[str, str]:
        # Injected clients may not carry the default header.
        return {"User-Agent": self._config.user_agent}


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(ExploreError):
    """Base exception for service adapter errors.

    Attributes:
        provider: Name of the adapter that raised the error.
        message: Human-readable error description.
        retryable: Whether a repeat search could succeed.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class LocationUnavailable(ProviderError):
    """The device location provider denied or failed the position request."""

    default_stage = "resolve_coordinate"
    default_code = "LOCATION_UNAVAILABLE"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)


class GeocodingServiceError(ProviderError):
    """Transport or parse failure talking to the geocoding service."""

    default_stage = "resolve_coordinate"
    default_code = "GEOCODING_FAILED"

    def __init__(self, provider: str, message: str, *, retryable: bool = True) -> None:
        super().__init__(provider, message, retryable=retryable)


class SpatialQueryError(ProviderError):
    """Transport or parse failure executing the spatial query."""

    default_stage = "execute_query"
    default_code = "SPATIAL_QUERY_FAILED"

    def __init__(self, provider: str, message: str, *, retryable: bool = True) -> None:
        super().__init__(provider, message, retryable=retryable)


class EnrichmentLookupError(ProviderError):
    """Per-POI knowledge lookup failure.  Always recovered by the enricher."""

    default_stage = "enrich_metadata"
    default_code = "ENRICHMENT_LOOKUP_FAILED"

    def __init__(self, provider: str, message: str, *, retryable: bool = True) -> None:
        super().__init__(provider, message, retryable=retryable)


# ---------------------------------------------------------------------------
# Response shape errors
# ---------------------------------------------------------------------------
# Each keeps its service error as a base so the coordinator handles it the
# same way, while ``category`` reports ``"contract"``.


class GeocodingResponseError(GeocodingServiceError, ContractError):
    """The geocoding service answered with an unexpected payload shape."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)


class SpatialQueryResponseError(SpatialQueryError, ContractError):
    """The geodata service answered with an unexpected payload shape."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)


class EnrichmentResponseError(EnrichmentLookupError, ContractError):
    """The knowledge service answered with an unexpected payload shape."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)
