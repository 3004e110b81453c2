"""Point-of-interest models.

- ``RawFeature``: one Overpass element, normalised once at the service
  boundary so that nothing downstream touches the loose JSON.
- ``POI``: the entity threaded through the rest of the pipeline.
  Position is always valid; enrichment fields are added in place.
- ``PageSummary``: what the knowledge service knows about a place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from explore_local.core.constants import UNNAMED_PLACE
from explore_local.models.location import Coordinate
from explore_local.models.query import GeometryKind
from explore_local.models.validation import ModelValidationError, check_non_empty

if TYPE_CHECKING:
    from explore_local.models.contracts import PoiPayload


@dataclass(frozen=True, slots=True)
class RawFeature:
    """A single element returned by the geodata service.

    Attributes:
        id: OSM element id (unique per ``kind``).
        kind: Element kind; point features carry ``lat``/``lon``, areas
            and relations carry a precomputed ``center``.
        tags: Raw OSM tags; ``name`` may be absent.
        lat: Latitude of a point feature.
        lon: Longitude of a point feature.
        center_lat: Latitude of the server-computed centroid.
        center_lon: Longitude of the server-computed centroid.
    """

    id: int
    kind: GeometryKind
    tags: dict[str, str] = field(default_factory=dict)
    lat: float | None = None
    lon: float | None = None
    center_lat: float | None = None
    center_lon: float | None = None

    @classmethod
    def from_element(cls, element: Mapping[str, Any]) -> RawFeature:
        """Build a feature from an Overpass ``elements[]`` entry.

        A missing or unknown ``type`` is inferred from the geometry that
        is present (direct coordinates → point, ``center`` → area).

        Raises:
            TypeError: If the element or its tags are not mappings.
            KeyError: If the element has no ``id``.
            ValueError: If the ``id`` is not an integer.
        """
        if not isinstance(element, Mapping):
            msg = f"element must be a mapping, got {type(element).__name__}"
            raise TypeError(msg)

        feature_id = int(element["id"])

        tags_raw = element.get("tags") or {}
        if not isinstance(tags_raw, Mapping):
            msg = f"tags must be a mapping, got {type(tags_raw).__name__}"
            raise TypeError(msg)

        lat = _optional_float(element.get("lat"))
        lon = _optional_float(element.get("lon"))

        center_lat = center_lon = None
        center = element.get("center")
        if isinstance(center, Mapping):
            center_lat = _optional_float(center.get("lat"))
            center_lon = _optional_float(center.get("lon"))

        kind = GeometryKind.from_osm_type(element.get("type"))
        if kind is None:
            has_point = lat is not None and lon is not None
            kind = GeometryKind.POINT if has_point or center is None else GeometryKind.AREA

        return cls(
            id=feature_id,
            kind=kind,
            tags={str(k): str(v) for k, v in tags_raw.items()},
            lat=lat,
            lon=lon,
            center_lat=center_lat,
            center_lon=center_lon,
        )

    @property
    def name(self) -> str | None:
        """The ``name`` tag, or ``None`` when absent or blank."""
        value = self.tags.get("name", "").strip()
        return value or None

    @property
    def position(self) -> Coordinate | None:
        """Own coordinates if present, else the centroid, else ``None``.

        Out-of-range values count as unresolvable.
        """
        if self.lat is not None and self.lon is not None:
            lat, lon = self.lat, self.lon
        elif self.center_lat is not None and self.center_lon is not None:
            lat, lon = self.center_lat, self.center_lon
        else:
            return None
        try:
            return Coordinate(lat, lon)
        except ModelValidationError:
            return None


@dataclass(frozen=True, slots=True)
class PageSummary:
    """Encyclopedia metadata for a place.

    Attributes:
        title: Page title.
        description: Short description, if the page has one.
        thumbnail_url: Thumbnail image URL, if the page has one.
        page_url: Canonical page URL.
    """

    title: str = ""
    description: str | None = None
    thumbnail_url: str | None = None
    page_url: str | None = None


@dataclass(slots=True)
class POI:
    """A positioned point of interest.

    Created by normalisation from a ``RawFeature``; the metadata
    enricher fills ``description``, ``image_url`` and ``reference_link``
    in place.  After the result set is committed the instance is not
    modified again.

    Attributes:
        id: OSM element id.
        name: Display name (``"Unnamed place"`` when the feature has none).
        latitude: Degrees north.
        longitude: Degrees east.
        kind: OSM element kind the POI came from.
        distance_m: Geodesic distance from the search center in metres.
        description: Short encyclopedia description.
        image_url: Thumbnail image URL.
        reference_link: Canonical encyclopedia page URL.
    """

    id: int
    name: str
    latitude: float
    longitude: float
    kind: GeometryKind = GeometryKind.POINT
    distance_m: float | None = None
    description: str | None = None
    image_url: str | None = None
    reference_link: str | None = None

    def __post_init__(self) -> None:
        # Raises ModelValidationError for an invalid position.
        Coordinate(self.latitude, self.longitude)
        check_non_empty("POI", "name", self.name)

    @classmethod
    def from_feature(cls, feature: RawFeature, position: Coordinate) -> POI:
        return cls(
            id=feature.id,
            name=feature.name or UNNAMED_PLACE,
            latitude=position.latitude,
            longitude=position.longitude,
            kind=feature.kind,
        )

    @property
    def key(self) -> str:
        """Identifier unique across element kinds (e.g. ``"way/42"``)."""
        return f"{self.kind.value}/{self.id}"

    @property
    def position(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def is_enriched(self) -> bool:
        return bool(self.description or self.image_url or self.reference_link)

    def apply_summary(self, summary: PageSummary) -> bool:
        """Copy non-empty summary fields onto this POI.

        Returns:
            ``True`` if at least one field was set.
        """
        self.description = summary.description or None
        self.image_url = summary.thumbnail_url or None
        self.reference_link = summary.page_url or None
        return self.is_enriched

    def to_dict(self) -> PoiPayload:
        """Serialise for the result sink / HTTP surface."""
        return {
            "id": self.id,
            "key": self.key,
            "kind": self.kind.value,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "distance_m": self.distance_m,
            "description": self.description,
            "image_url": self.image_url,
            "reference_link": self.reference_link,
        }


def _optional_float(value: object) -> float | None:
    """Coerce a JSON number or numeric string to float; anything else is ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
