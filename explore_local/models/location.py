"""Location models: coordinates, location intents, geocoding candidates.

A ``LocationIntent`` is what the UI hands to the pipeline; the
coordinate resolver turns it into a single ``Coordinate``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from explore_local.models.validation import check_non_empty, check_range


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS 84 position.

    Attributes:
        latitude: Degrees north, in [-90, 90].
        longitude: Degrees east, in [-180, 180].
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        check_range("Coordinate", "latitude", self.latitude, -90, 90)
        check_range("Coordinate", "longitude", self.longitude, -180, 180)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


class LocationMode(enum.Enum):
    """How the search center is obtained."""

    DEVICE = "device"
    CITY = "city"


@dataclass(frozen=True, slots=True)
class LocationIntent:
    """A user's request for where to search.

    Attributes:
        mode: ``DEVICE`` to use a geolocation fix, ``CITY`` to geocode a name.
        city_name: Free-text place name (required in ``CITY`` mode).
    """

    mode: LocationMode
    city_name: str = ""

    def __post_init__(self) -> None:
        if self.mode is LocationMode.CITY:
            check_non_empty("LocationIntent", "city_name", self.city_name)

    @classmethod
    def device(cls) -> LocationIntent:
        return cls(mode=LocationMode.DEVICE)

    @classmethod
    def city(cls, name: str) -> LocationIntent:
        return cls(mode=LocationMode.CITY, city_name=name.strip())

    def describe(self) -> str:
        """Short label for log lines."""
        if self.mode is LocationMode.CITY:
            return f"city:{self.city_name}"
        return "device"


@dataclass(frozen=True, slots=True)
class GeocodeCandidate:
    """One ranked match returned by the geocoding service.

    Attributes:
        coordinate: Resolved position of the match.
        display_name: Service-provided label (e.g. ``"London, Greater London, England"``).
    """

    coordinate: Coordinate
    display_name: str = ""
