"""Spatial query models.

A ``QuerySpec`` is the service-neutral description of one composite
search: a center, a radius and an ordered catalog of tag predicates,
each scoped to the OSM geometry kinds it is meaningful for.  The
Overpass adapter serialises it; nothing mutates it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from explore_local.models.location import Coordinate
from explore_local.models.validation import ModelValidationError, check_non_empty, check_positive


class GeometryKind(enum.Enum):
    """OSM element kinds a predicate can apply to.

    Values are the Overpass statement keywords.
    """

    POINT = "node"
    AREA = "way"
    MULTI_AREA = "relation"

    @classmethod
    def from_osm_type(cls, value: object) -> GeometryKind | None:
        """Map an Overpass ``type`` string to a kind, or ``None`` if unknown."""
        for kind in cls:
            if kind.value == value:
                return kind
        return None


@dataclass(frozen=True, slots=True)
class CategoryPredicate:
    """A single tag rule in the category catalog.

    Attributes:
        category: Human-facing grouping (``"historic"``, ``"eatery"`` ...).
        key: OSM tag key (e.g. ``"tourism"``).
        value: Required tag value, or ``None`` to match any value.
        geometry_kinds: Element kinds the rule is evaluated against.
    """

    category: str
    key: str
    value: str | None = None
    geometry_kinds: tuple[GeometryKind, ...] = (GeometryKind.POINT,)

    def __post_init__(self) -> None:
        check_non_empty("CategoryPredicate", "key", self.key)
        if not self.geometry_kinds:
            raise ModelValidationError(
                "CategoryPredicate", "geometry_kinds", self.geometry_kinds, "must not be empty"
            )


@dataclass(frozen=True, slots=True)
class QuerySpec:
    """Composite radius search over all category predicates (logical OR).

    Attributes:
        center: Search center.
        radius_m: Search radius in metres.
        predicates: Ordered category predicates; order is preserved in
            the serialised query.
    """

    center: Coordinate
    radius_m: int
    predicates: tuple[CategoryPredicate, ...]

    def __post_init__(self) -> None:
        check_positive("QuerySpec", "radius_m", self.radius_m)
        if not self.predicates:
            raise ModelValidationError("QuerySpec", "predicates", self.predicates, "must not be empty")

    @property
    def statement_count(self) -> int:
        """Number of per-geometry-kind statements the query expands to."""
        return sum(len(p.geometry_kinds) for p in self.predicates)
