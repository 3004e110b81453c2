"""Search cycle coordination.

- search_pipeline: SearchCoordinator, which runs one cycle per intent and
  commits only the latest cycle's result
- sink: ResultSink contract consumed by the map/list UI
"""
