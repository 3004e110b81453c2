"""Spatial query builder.

Composes the fixed category catalog around a center into one
``QuerySpec``.  The catalog and the radius are constants: there is no
per-search customisation and no radius expansion when results are
sparse.
"""

from __future__ import annotations

from explore_local.core.constants import DEFAULT_SEARCH_RADIUS_M
from explore_local.models.location import Coordinate
from explore_local.models.query import CategoryPredicate, GeometryKind, QuerySpec

_POINT_AREA = (GeometryKind.POINT, GeometryKind.AREA)
_ALL_KINDS = (GeometryKind.POINT, GeometryKind.AREA, GeometryKind.MULTI_AREA)

# Eateries are point-only; parks and historic sites are often mapped as
# multipolygon relations.
CATEGORY_CATALOG: tuple[CategoryPredicate, ...] = (
    CategoryPredicate("historic", "historic", None, _ALL_KINDS),
    CategoryPredicate("attraction", "tourism", "museum", _POINT_AREA),
    CategoryPredicate("attraction", "tourism", "gallery", _POINT_AREA),
    CategoryPredicate("attraction", "tourism", "zoo", _POINT_AREA),
    CategoryPredicate("attraction", "tourism", "theme_park", _POINT_AREA),
    CategoryPredicate("attraction", "tourism", "attraction", _POINT_AREA),
    CategoryPredicate("nature", "leisure", "park", _ALL_KINDS),
    CategoryPredicate("nature", "leisure", "garden", _POINT_AREA),
    CategoryPredicate("nature", "leisure", "nature_reserve", _POINT_AREA),
    CategoryPredicate("eatery", "amenity", "restaurant", (GeometryKind.POINT,)),
    CategoryPredicate("eatery", "amenity", "cafe", (GeometryKind.POINT,)),
    CategoryPredicate("eatery", "amenity", "pub", (GeometryKind.POINT,)),
    CategoryPredicate("eatery", "amenity", "bar", (GeometryKind.POINT,)),
)


def build_query(center: Coordinate, radius_m: int = DEFAULT_SEARCH_RADIUS_M) -> QuerySpec:
    """Build the composite category query around *center*.

    Raises:
        ModelValidationError: If *radius_m* is not positive.
    """
    return QuerySpec(center=center, radius_m=radius_m, predicates=CATEGORY_CATALOG)
