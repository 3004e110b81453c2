"""External service adapters.

Implements the adapter pattern for every collaborator of the pipeline:
- LocationProvider / StaticLocationProvider: device position fix
- Geocoder / NominatimAdapter: place name → coordinates
- GeodataProvider / OverpassAdapter: spatial POI query
- KnowledgeProvider / WikipediaAdapter: encyclopedia summaries
"""

from explore_local.providers.base import (
    EnrichmentLookupError,
    GeocodingServiceError,
    Geocoder,
    GeodataProvider,
    KnowledgeProvider,
    LocationProvider,
    LocationUnavailable,
    ProviderError,
    SpatialQueryError,
)
from explore_local.providers.device import StaticLocationProvider
from explore_local.providers.nominatim import NominatimAdapter
from explore_local.providers.overpass import OverpassAdapter, to_overpass_ql
from explore_local.providers.wikipedia import WikipediaAdapter

__all__ = [
    "EnrichmentLookupError",
    "GeocodingServiceError",
    "Geocoder",
    "GeodataProvider",
    "KnowledgeProvider",
    "LocationProvider",
    "LocationUnavailable",
    "NominatimAdapter",
    "OverpassAdapter",
    "ProviderError",
    "SpatialQueryError",
    "StaticLocationProvider",
    "WikipediaAdapter",
    "to_overpass_ql",
]
