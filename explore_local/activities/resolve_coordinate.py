"""Coordinate resolution activity.

Turns a ``LocationIntent`` into a single ``Coordinate``:

- Device mode asks the location provider for one fix.  A denial is
  reported as ``LocationUnavailable`` and never retried automatically.
- City mode sends the free-text name to the geocoder and takes the
  first candidate.  There is no disambiguation: the service's own
  ranking decides deterministically.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from explore_local.core.exceptions import PermanentError
from explore_local.models.location import LocationMode
from explore_local.providers.base import LocationUnavailable
from explore_local.providers.device import DEVICE

if TYPE_CHECKING:
    from explore_local.models.location import Coordinate, LocationIntent
    from explore_local.providers.base import Geocoder, LocationProvider

logger = logging.getLogger("explore_local.activities.resolve_coordinate")


class PlaceNotFound(PermanentError):
    """The geocoder returned no candidates for a place name.

    Attributes:
        place_name: The name that was searched.
    """

    default_stage = "resolve_coordinate"
    default_code = "PLACE_NOT_FOUND"

    def __init__(self, place_name: str) -> None:
        self.place_name = place_name
        super().__init__(f"No place found for {place_name!r}")


async def resolve_coordinate(
    intent: LocationIntent,
    *,
    geocoder: Geocoder | None = None,
    location_provider: LocationProvider | None = None,
) -> Coordinate:
    """Resolve *intent* to a search center.

    Args:
        intent: Device or city-name location intent.
        geocoder: Geocoding adapter (required for city mode).
        location_provider: Device location adapter (required for device mode).

    Returns:
        The resolved coordinate.

    Raises:
        LocationUnavailable: Device mode and no fix could be obtained.
        PlaceNotFound: City mode and the geocoder returned no candidates.
        GeocodingServiceError: City mode and the geocoder failed.
    """
    if intent.mode is LocationMode.DEVICE:
        if location_provider is None:
            raise LocationUnavailable(DEVICE, "no location provider is configured")
        coordinate = await location_provider.locate()
        logger.info(
            "Coordinate resolved | mode=device | center=(%.5f, %.5f)",
            coordinate.latitude,
            coordinate.longitude,
        )
        return coordinate

    if geocoder is None:
        msg = "city mode requires a geocoder"
        raise ValueError(msg)

    candidates = await geocoder.geocode(intent.city_name)
    if not candidates:
        logger.info("Place not found | city=%s", intent.city_name)
        raise PlaceNotFound(intent.city_name)

    best = candidates[0]
    logger.info(
        "Coordinate resolved | mode=city | city=%s | match=%s | center=(%.5f, %.5f) | candidates=%d",
        intent.city_name,
        best.display_name,
        best.coordinate.latitude,
        best.coordinate.longitude,
        len(candidates),
    )
    return best.coordinate
