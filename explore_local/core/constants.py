"""Shared pipeline constants — single source of truth.

Centralises service endpoints, search defaults and other literals used
by the query builder, the service adapters and the configuration layer.
"""

from __future__ import annotations

from explore_local import __version__

# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------

DEFAULT_OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
"""Overpass API interpreter endpoint (geodata query service)."""

DEFAULT_NOMINATIM_URL: str = "https://nominatim.openstreetmap.org"
"""Nominatim base URL (geocoding lookup); ``/search`` is appended."""

DEFAULT_WIKIPEDIA_API_URL: str = "https://en.wikipedia.org/w/api.php"
"""MediaWiki action API endpoint (knowledge-lookup service)."""

DEFAULT_USER_AGENT: str = f"explore-local/{__version__}"
"""User-Agent sent on every outbound request (Nominatim/Wikipedia policy)."""

# ---------------------------------------------------------------------------
# Search defaults
# ---------------------------------------------------------------------------

DEFAULT_SEARCH_RADIUS_M: int = 3000
"""Fixed search radius around the resolved center, in metres."""

DEFAULT_OVERPASS_TIMEOUT_S: int = 25
"""Server-side timeout hint embedded in every Overpass query, in seconds."""

DEFAULT_HTTP_TIMEOUT_S: float = 30.0
"""Client socket timeout applied by the HTTP layer, in seconds."""

DEFAULT_GEOCODER_RESULT_LIMIT: int = 5
"""Maximum geocoding candidates requested; only the first is used."""

DEFAULT_THUMBNAIL_PX: int = 320
"""Requested Wikipedia thumbnail width, in pixels."""

UNNAMED_PLACE: str = "Unnamed place"
"""Placeholder name for features without a ``name`` tag."""
