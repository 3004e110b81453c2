"""Search cycle and result-set models.

A ``SearchResultSet`` is owned by exactly one search cycle (identified
by its token) and is replaced wholesale by the next committed cycle.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from explore_local.models.location import Coordinate
from explore_local.models.poi import POI

if TYPE_CHECKING:
    from explore_local.core.exceptions import ExploreError
    from explore_local.models.contracts import SearchResultPayload


class CycleState(enum.Enum):
    """Lifecycle state of a single search cycle.

    ``IDLE`` is both the initial and the terminal state: a cycle moves
    ``IDLE → RESOLVING → QUERYING → ENRICHING → READY | FAILED → IDLE``.
    """

    IDLE = "idle"
    RESOLVING = "resolving"
    QUERYING = "querying"
    ENRICHING = "enriching"
    READY = "ready"
    FAILED = "failed"


class ResultStatus(enum.Enum):
    """Outcome of a search cycle as seen by the result sink."""

    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SearchResultSet:
    """Ordered POIs produced by one search cycle.

    Attributes:
        token: Cycle token of the search that produced this set.
        pois: POIs in discovery order (not re-sorted).
        status: ``READY``, or ``FAILED`` for a cycle that degraded to empty.
        center: Resolved search center, when resolution succeeded.
        error: Structured error payload for a ``FAILED`` set.
    """

    token: int
    pois: tuple[POI, ...] = ()
    status: ResultStatus = ResultStatus.READY
    center: Coordinate | None = None
    error: dict[str, object] | None = None

    @classmethod
    def ready(cls, token: int, pois: list[POI], center: Coordinate) -> SearchResultSet:
        return cls(token=token, pois=tuple(pois), status=ResultStatus.READY, center=center)

    @classmethod
    def failed(
        cls,
        token: int,
        error: ExploreError,
        center: Coordinate | None = None,
    ) -> SearchResultSet:
        """Empty result set carrying the error that ended the cycle."""
        return cls(
            token=token,
            pois=(),
            status=ResultStatus.FAILED,
            center=center,
            error=error.to_error_dict(),
        )

    def __len__(self) -> int:
        return len(self.pois)

    def __iter__(self) -> Iterator[POI]:
        return iter(self.pois)

    @property
    def is_empty(self) -> bool:
        """Whether the sink should show its "no results" state."""
        return not self.pois

    def find(self, poi_ref: int | str) -> POI | None:
        """Look up a POI by ``key`` (``"way/42"``) or by bare id (first match)."""
        for poi in self.pois:
            if isinstance(poi_ref, str) and poi.key == poi_ref:
                return poi
            if poi.id == poi_ref:
                return poi
        return None

    def to_dict(self) -> SearchResultPayload:
        return {
            "token": self.token,
            "status": self.status.value,
            "center": self.center.to_dict() if self.center else None,
            "count": len(self.pois),
            "pois": [poi.to_dict() for poi in self.pois],
            "error": self.error,
        }
