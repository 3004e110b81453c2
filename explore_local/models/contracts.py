"""Payload contracts for the result sink and HTTP boundary.

``TypedDict`` is used because these payloads leave the process as JSON;
the dataclass models serialise into them via ``to_dict()``.
"""

from __future__ import annotations

from typing import TypedDict


class CoordinatePayload(TypedDict):
    """Serialised ``Coordinate``."""

    latitude: float
    longitude: float


class PoiPayload(TypedDict):
    """Serialised ``POI``: one map marker / list entry."""

    id: int
    key: str
    kind: str
    name: str
    latitude: float
    longitude: float
    distance_m: float | None
    description: str | None
    image_url: str | None
    reference_link: str | None


class SearchResultPayload(TypedDict):
    """Serialised ``SearchResultSet``: the body of ``GET /api/pois``."""

    token: int
    status: str
    center: CoordinatePayload | None
    count: int
    pois: list[PoiPayload]
    error: dict[str, object] | None
