"""Explore Local: points-of-interest aggregation pipeline.

Resolves a location (device fix or city name), queries OpenStreetMap
via Overpass for nearby historic sites, museums, parks and eateries,
and enriches each place with a Wikipedia summary and thumbnail.
"""

__version__ = "0.1.0"
