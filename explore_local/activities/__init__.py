"""Search pipeline stages.

Each activity performs a single unit of work within a search cycle:
- resolve_coordinate: Turn a location intent into a coordinate
- build_query: Compose the composite category query around a center
- execute_query: Run the query and normalise features into POIs
- enrich_metadata: Attach encyclopedia summaries to every POI
"""
