"""Geodesic helpers on the WGS 84 ellipsoid."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from explore_local.models.location import Coordinate


def geodesic_distance_m(origin: Coordinate, target: Coordinate) -> float:
    """Distance in metres between two coordinates along the ellipsoid.

    Uses ``pyproj.Geod`` (inverse problem) rather than a spherical
    haversine, so values agree with OSM tooling to the metre.
    """
    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    _fwd_az, _back_az, distance_m = geod.inv(
        origin.longitude, origin.latitude, target.longitude, target.latitude
    )
    return float(distance_m)
