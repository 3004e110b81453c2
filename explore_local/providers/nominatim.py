"""Nominatim adapter (OpenStreetMap geocoding lookup).

``GET {base}/search?q=<name>&format=json&limit=N`` returns a ranked list
of places whose ``lat``/``lon`` are decimal strings.  The adapter turns
them into ``GeocodeCandidate`` records; choosing among them is the
coordinate resolver's job, and it only ever takes the first.

The first entry therefore has to parse; a malformed entry further down
the ranking is skipped with a warning.

Nominatim's usage policy requires an identifying User-Agent, which
``HttpAdapter`` sends on every request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx

from explore_local.core.constants import DEFAULT_GEOCODER_RESULT_LIMIT, DEFAULT_NOMINATIM_URL
from explore_local.models.location import Coordinate, GeocodeCandidate
from explore_local.models.validation import ModelValidationError
from explore_local.providers.base import (
    Geocoder,
    GeocodingResponseError,
    GeocodingServiceError,
    HttpAdapter,
)

if TYPE_CHECKING:
    from explore_local.models.provider import ProviderConfig

logger = logging.getLogger(__name__)

NOMINATIM = "nominatim"


class NominatimAdapter(HttpAdapter, Geocoder):
    """Nominatim search client.

    ``extra_params["limit"]`` caps the number of candidates requested.
    """

    def __init__(self, config: ProviderConfig, *, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(config, client=client)
        self._limit = config.int_param("limit", DEFAULT_GEOCODER_RESULT_LIMIT)

    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        base = (self.config.api_base_url or DEFAULT_NOMINATIM_URL).rstrip("/")
        params = {"q": query, "format": "json", "limit": self._limit}

        try:
            async with self._http() as client:
                response = await client.get(f"{base}/search", params=params, headers=self._headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            msg = f"Geocoding request failed for {query!r}: {exc}"
            raise GeocodingServiceError(self.name, msg) from exc
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for an undecodable body.
            msg = f"Geocoding response is not valid JSON: {exc}"
            raise GeocodingServiceError(self.name, msg) from exc

        candidates = self._parse_candidates(payload)
        logger.info("Geocoded | query=%s | candidates=%d", query, len(candidates))
        return candidates

    def _parse_candidates(self, payload: object) -> list[GeocodeCandidate]:
        if not isinstance(payload, list):
            msg = f"Geocoding response must be a list, got {type(payload).__name__}"
            raise GeocodingResponseError(self.name, msg)

        candidates: list[GeocodeCandidate] = []
        for rank, entry in enumerate(payload):
            try:
                candidates.append(_to_candidate(entry))
            except (KeyError, TypeError, ValueError) as exc:
                # ModelValidationError is a ValueError: out-of-range coordinates land here too.
                kind = "out of range" if isinstance(exc, ModelValidationError) else "malformed"
                if rank == 0:
                    msg = f"Geocoding candidate has {kind} coordinates: {entry!r:.200}"
                    raise GeocodingResponseError(self.name, msg) from exc
                logger.warning(
                    "Skipping geocoding candidate | rank=%d | reason=%s coordinates | entry=%.200r",
                    rank,
                    kind,
                    entry,
                )
        return candidates


def _to_candidate(entry: object) -> GeocodeCandidate:
    if not isinstance(entry, Mapping):
        msg = f"candidate must be an object, got {type(entry).__name__}"
        raise TypeError(msg)
    return GeocodeCandidate(
        coordinate=Coordinate(float(entry["lat"]), float(entry["lon"])),
        display_name=str(entry.get("display_name", "")),
    )
