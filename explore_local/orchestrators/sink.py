"""Result sink contract.

The map/list UI is an external collaborator.  The coordinator feeds it
through this interface only: committed result sets (possibly empty,
which the UI shows as its "no results" state) and the currently
selected POI for re-centering the map.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from explore_local.models.poi import POI
    from explore_local.models.result import SearchResultSet


class ResultSink(abc.ABC):
    """Consumer of committed search results."""

    @abc.abstractmethod
    def publish(self, result: SearchResultSet) -> None:
        """Receive the result set of the latest search cycle."""

    def focus(self, poi: POI) -> None:
        """Receive the POI the user selected (default: ignore)."""


class InMemoryResultSink(ResultSink):
    """Records everything it receives; used by the HTTP surface and tests."""

    def __init__(self) -> None:
        self.published: list[SearchResultSet] = []
        self.focused: list[POI] = []

    def publish(self, result: SearchResultSet) -> None:
        self.published.append(result)

    def focus(self, poi: POI) -> None:
        self.focused.append(poi)

    @property
    def latest(self) -> SearchResultSet | None:
        return self.published[-1] if self.published else None
