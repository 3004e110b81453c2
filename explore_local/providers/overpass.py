"""Overpass API adapter (OpenStreetMap geodata query service).

Serialises a ``QuerySpec`` into Overpass QL, with one statement per
predicate per geometry kind inside a single union, so the whole
catalog is one round-trip. Parses the ``elements`` array of the
JSON response into ``RawFeature`` records.

Areas and relations are requested with ``out center;`` so the server
computes a centroid for them; nodes carry their own ``lat``/``lon``.

References:
    Overpass QL: https://wiki.openstreetmap.org/wiki/Overpass_API/Overpass_QL
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx

from explore_local.core.constants import DEFAULT_OVERPASS_TIMEOUT_S, DEFAULT_OVERPASS_URL
from explore_local.models.poi import RawFeature
from explore_local.providers.base import (
    GeodataProvider,
    HttpAdapter,
    SpatialQueryError,
    SpatialQueryResponseError,
)

if TYPE_CHECKING:
    from explore_local.models.provider import ProviderConfig
    from explore_local.models.query import CategoryPredicate, QuerySpec

logger = logging.getLogger(__name__)

OVERPASS = "overpass"


class OverpassAdapter(HttpAdapter, GeodataProvider):
    """Overpass interpreter client.

    ``extra_params["timeout_s"]`` overrides the server-side timeout hint
    embedded in the query header.
    """

    def __init__(self, config: ProviderConfig, *, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(config, client=client)
        self._timeout_s = config.int_param("timeout_s", DEFAULT_OVERPASS_TIMEOUT_S)

    async def query(self, spec: QuerySpec) -> list[RawFeature]:
        """POST the serialised query and parse the returned elements.

        Raises:
            SpatialQueryError: On transport, HTTP status or parse failure.
        """
        url = self.config.api_base_url or DEFAULT_OVERPASS_URL
        ql = to_overpass_ql(spec, timeout_s=self._timeout_s)

        try:
            async with self._http() as client:
                response = await client.post(url, data={"data": ql}, headers=self._headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"Overpass returned HTTP {status}"
            # 400 means the query itself was rejected; repeating it cannot help.
            raise SpatialQueryError(self.name, msg, retryable=status != 400) from exc
        except httpx.HTTPError as exc:
            msg = f"Overpass request failed: {exc}"
            raise SpatialQueryError(self.name, msg) from exc
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for an undecodable body.
            msg = f"Overpass response is not valid JSON: {exc}"
            raise SpatialQueryError(self.name, msg) from exc

        features = parse_elements(payload, provider=self.name)

        logger.info(
            "Overpass query complete | features=%d | radius=%d m | center=(%.5f, %.5f)",
            len(features),
            spec.radius_m,
            spec.center.latitude,
            spec.center.longitude,
        )
        return features


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def to_overpass_ql(spec: QuerySpec, *, timeout_s: int = DEFAULT_OVERPASS_TIMEOUT_S) -> str:
    """Serialise *spec* into a single Overpass QL union query.

    Example output (abridged)::

        [out:json][timeout:25];
        (
          node["historic"](around:3000,51.505,-0.09);
          way["historic"](around:3000,51.505,-0.09);
          ...
        );
        out center;
    """
    around = f"(around:{spec.radius_m},{spec.center.latitude},{spec.center.longitude})"
    lines = [f"[out:json][timeout:{timeout_s}];", "("]
    for predicate in spec.predicates:
        selector = _tag_selector(predicate)
        for kind in predicate.geometry_kinds:
            lines.append(f"  {kind.value}{selector}{around};")
    lines.append(");")
    lines.append("out center;")
    return "\n".join(lines)


def parse_elements(payload: object, *, provider: str = OVERPASS) -> list[RawFeature]:
    """Convert an Overpass JSON response into ``RawFeature`` records.

    Individual unparseable elements are skipped with a warning; a
    response without an ``elements`` list fails the whole query.

    Raises:
        SpatialQueryResponseError: If the response shape is not an Overpass result.
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("elements"), list):
        msg = "Overpass response has no 'elements' list"
        raise SpatialQueryResponseError(provider, msg)

    remark = payload.get("remark")
    if remark:
        # Overpass reports server-side timeouts here and still returns partial results.
        logger.warning("Overpass remark (results may be partial) | remark=%s", remark)

    features: list[RawFeature] = []
    for index, element in enumerate(payload["elements"]):
        try:
            features.append(RawFeature.from_element(element))
        except (KeyError, TypeError, ValueError):
            logger.warning(
                "Skipping unparseable Overpass element | index=%d | element=%.200r",
                index,
                element,
                exc_info=True,
            )
    return features


def _tag_selector(predicate: CategoryPredicate) -> str:
    """Render ``["key"]`` or ``["key"="value"]`` with JSON-style quoting."""
    if predicate.value is None:
        return f"[{json.dumps(predicate.key)}]"
    return f"[{json.dumps(predicate.key)}={json.dumps(predicate.value)}]"
