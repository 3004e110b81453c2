"""Spatial query execution activity.

Runs a ``QuerySpec`` against the geodata service and normalises the
returned features into ``POI`` records:

- Position is the feature's own coordinates, else its server-computed
  centroid.  A feature with neither (or with out-of-range values) is
  dropped without failing the batch.
- Name is the ``name`` tag, else the ``"Unnamed place"`` placeholder.
- Order is the service's response order.  Overlapping elements for the
  same real-world place (a node and a way, say) are all kept.

A service failure surfaces as ``SpatialQueryError``; turning that into
an empty result set is the coordinator's decision, not this module's.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from explore_local.models.poi import POI
from explore_local.utils.geodesy import geodesic_distance_m

if TYPE_CHECKING:
    from collections.abc import Iterable

    from explore_local.models.location import Coordinate
    from explore_local.models.poi import RawFeature
    from explore_local.models.query import QuerySpec
    from explore_local.providers.base import GeodataProvider

logger = logging.getLogger("explore_local.activities.execute_query")


async def execute_query(spec: QuerySpec, *, geodata: GeodataProvider) -> list[POI]:
    """Execute *spec* and return positioned POIs in discovery order.

    Raises:
        SpatialQueryError: If the geodata service request fails.
    """
    features = await geodata.query(spec)
    pois = normalize_features(features, center=spec.center)

    logger.info(
        "Query executed | features=%d | pois=%d | dropped=%d",
        len(features),
        len(pois),
        len(features) - len(pois),
    )
    return pois


def normalize_features(
    features: Iterable[RawFeature],
    *,
    center: Coordinate | None = None,
) -> list[POI]:
    """Convert raw features to POIs, dropping those without a position.

    Args:
        features: Features in service order.
        center: Search center; when given, each POI gets ``distance_m``.
    """
    pois: list[POI] = []
    for feature in features:
        position = feature.position
        if position is None:
            logger.debug(
                "Dropping feature without coordinates | element=%s/%d",
                feature.kind.value,
                feature.id,
            )
            continue
        poi = POI.from_feature(feature, position)
        if center is not None:
            poi.distance_m = round(geodesic_distance_m(center, position), 1)
        pois.append(poi)
    return pois
