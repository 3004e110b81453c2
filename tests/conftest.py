"""Shared pytest fixtures for the explore-local test suite."""

from __future__ import annotations

import pytest

from explore_local.models.location import Coordinate
from explore_local.models.poi import PageSummary, RawFeature
from explore_local.models.query import GeometryKind
from explore_local.providers.base import EnrichmentLookupError
from tests.fakes import FakeGeodata, FakeKnowledge

# ---------------------------------------------------------------------------
# Scenario fixtures (central London, one point and one area feature)
# ---------------------------------------------------------------------------


@pytest.fixture()
def london() -> Coordinate:
    """Search center used throughout the end-to-end scenario."""
    return Coordinate(51.505, -0.09)


@pytest.fixture()
def old_fort() -> RawFeature:
    """A named point feature."""
    return RawFeature(
        id=1,
        kind=GeometryKind.POINT,
        tags={"name": "Old Fort", "historic": "fort"},
        lat=51.51,
        lon=-0.08,
    )


@pytest.fixture()
def unnamed_area() -> RawFeature:
    """An area feature with no tags and a server-computed centroid."""
    return RawFeature(id=2, kind=GeometryKind.AREA, tags={}, center_lat=51.50, center_lon=-0.095)


@pytest.fixture()
def old_fort_summary() -> PageSummary:
    return PageSummary(
        title="Old Fort",
        description="17th-century fortification",
        thumbnail_url="https://upload.example.org/old_fort.jpg",
        page_url="https://en.wikipedia.org/wiki/Old_Fort",
    )


@pytest.fixture()
def scenario_geodata(old_fort: RawFeature, unnamed_area: RawFeature) -> FakeGeodata:
    return FakeGeodata([old_fort, unnamed_area])


@pytest.fixture()
def scenario_knowledge(old_fort_summary: PageSummary) -> FakeKnowledge:
    return FakeKnowledge(
        {
            "Old Fort": old_fort_summary,
            "Unnamed place": EnrichmentLookupError("wikipedia", "HTTP 503"),
        }
    )
