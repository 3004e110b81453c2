"""Data models and schemas.

Defines the data structures threaded through the search pipeline:
- Coordinate / LocationIntent: where to search
- QuerySpec / CategoryPredicate: what to search for
- RawFeature / POI / PageSummary: what was found and what is known about it
- SearchResultSet: the ordered result of one search cycle
"""

from explore_local.models.location import (
    Coordinate,
    GeocodeCandidate,
    LocationIntent,
    LocationMode,
)
from explore_local.models.poi import POI, PageSummary, RawFeature
from explore_local.models.query import CategoryPredicate, GeometryKind, QuerySpec
from explore_local.models.result import CycleState, ResultStatus, SearchResultSet
from explore_local.models.validation import ModelValidationError

__all__ = [
    "POI",
    "CategoryPredicate",
    "Coordinate",
    "CycleState",
    "GeocodeCandidate",
    "GeometryKind",
    "LocationIntent",
    "LocationMode",
    "ModelValidationError",
    "PageSummary",
    "QuerySpec",
    "RawFeature",
    "ResultStatus",
    "SearchResultSet",
]
