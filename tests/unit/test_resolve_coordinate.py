"""Tests for the coordinate resolution activity."""

from __future__ import annotations

import pytest

from explore_local.activities.resolve_coordinate import PlaceNotFound, resolve_coordinate
from explore_local.models.location import Coordinate, LocationIntent
from explore_local.providers.base import GeocodingServiceError, LocationUnavailable
from explore_local.providers.device import StaticLocationProvider
from tests.fakes import FakeGeocoder, candidate


class TestDeviceMode:
    @pytest.mark.asyncio()
    async def test_uses_fix(self) -> None:
        provider = StaticLocationProvider(Coordinate(51.505, -0.09))
        result = await resolve_coordinate(LocationIntent.device(), location_provider=provider)
        assert result == Coordinate(51.505, -0.09)

    @pytest.mark.asyncio()
    async def test_denied(self) -> None:
        provider = StaticLocationProvider.unavailable("permission denied")
        with pytest.raises(LocationUnavailable):
            await resolve_coordinate(LocationIntent.device(), location_provider=provider)

    @pytest.mark.asyncio()
    async def test_no_provider_is_unavailable(self) -> None:
        with pytest.raises(LocationUnavailable, match="no location provider"):
            await resolve_coordinate(LocationIntent.device())

    @pytest.mark.asyncio()
    async def test_geocoder_not_consulted(self) -> None:
        geocoder = FakeGeocoder()
        provider = StaticLocationProvider(Coordinate(1.0, 2.0))
        await resolve_coordinate(LocationIntent.device(), geocoder=geocoder, location_provider=provider)
        assert geocoder.queries == []


class TestCityMode:
    @pytest.mark.asyncio()
    async def test_first_candidate_wins(self) -> None:
        geocoder = FakeGeocoder(
            {"London": [candidate(51.5073, -0.1276, "London, England"), candidate(42.98, -81.24, "London, Ontario")]}
        )
        result = await resolve_coordinate(LocationIntent.city("London"), geocoder=geocoder)
        assert result == Coordinate(51.5073, -0.1276)
        assert geocoder.queries == ["London"]

    @pytest.mark.asyncio()
    async def test_no_candidates(self) -> None:
        with pytest.raises(PlaceNotFound) as exc_info:
            await resolve_coordinate(LocationIntent.city("Nowhereville"), geocoder=FakeGeocoder())
        err = exc_info.value
        assert err.place_name == "Nowhereville"
        assert err.code == "PLACE_NOT_FOUND"
        assert err.category == "permanent"

    @pytest.mark.asyncio()
    async def test_service_error_propagates(self) -> None:
        geocoder = FakeGeocoder(error=GeocodingServiceError("nominatim", "HTTP 503"))
        with pytest.raises(GeocodingServiceError):
            await resolve_coordinate(LocationIntent.city("London"), geocoder=geocoder)

    @pytest.mark.asyncio()
    async def test_requires_geocoder(self) -> None:
        with pytest.raises(ValueError, match="requires a geocoder"):
            await resolve_coordinate(LocationIntent.city("London"))
