"""Tests for the NominatimAdapter (geocoding lookup over ``httpx.MockTransport``)."""

from __future__ import annotations

import logging

import httpx
import pytest

from explore_local.models.location import Coordinate
from explore_local.models.provider import ProviderConfig
from explore_local.providers.base import GeocodingResponseError, GeocodingServiceError
from explore_local.providers.nominatim import NOMINATIM, NominatimAdapter


def _adapter(handler, **extra: str) -> NominatimAdapter:  # type: ignore[no-untyped-def]
    config = ProviderConfig(
        name=NOMINATIM,
        api_base_url="https://nominatim.test/",
        user_agent="explore-local-tests",
        extra_params=dict(extra),
    )
    return NominatimAdapter(config, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestNominatimGeocode:
    @pytest.mark.asyncio()
    async def test_returns_ranked_candidates(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    {"lat": "51.5073219", "lon": "-0.1276474", "display_name": "London, England"},
                    {"lat": "42.9832406", "lon": "-81.243372", "display_name": "London, Ontario"},
                ],
            )

        candidates = await _adapter(handler, limit="3").geocode("London")

        assert [c.display_name for c in candidates] == ["London, England", "London, Ontario"]
        assert candidates[0].coordinate == Coordinate(51.5073219, -0.1276474)
        request = seen[0]
        assert request.url.path == "/search"
        assert request.url.params["q"] == "London"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "3"
        assert request.headers["User-Agent"] == "explore-local-tests"

    @pytest.mark.asyncio()
    async def test_no_match_is_empty(self) -> None:
        candidates = await _adapter(lambda request: httpx.Response(200, json=[])).geocode("Nowhereville")
        assert candidates == []

    @pytest.mark.asyncio()
    async def test_http_error(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(503))
        with pytest.raises(GeocodingServiceError) as exc_info:
            await adapter.geocode("London")
        assert exc_info.value.retryable is True
        assert exc_info.value.code == "GEOCODING_FAILED"

    @pytest.mark.asyncio()
    async def test_non_list_payload(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json={"error": "rate limited"}))
        with pytest.raises(GeocodingServiceError, match="must be a list") as exc_info:
            await adapter.geocode("London")
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio()
    async def test_malformed_first_candidate(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json=[{"display_name": "London"}]))
        with pytest.raises(GeocodingResponseError, match="malformed") as exc_info:
            await adapter.geocode("London")
        assert exc_info.value.category == "contract"
        assert exc_info.value.code == "GEOCODING_FAILED"

    @pytest.mark.asyncio()
    async def test_malformed_later_candidates_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        payload = [
            {"lat": "51.5", "lon": "-0.12", "display_name": "London, England"},
            {"display_name": "broken"},
            "garbage",
            {"lat": "95", "lon": "0"},
            {"lat": "42.98", "lon": "-81.24", "display_name": "London, Ontario"},
        ]
        adapter = _adapter(lambda request: httpx.Response(200, json=payload))
        with caplog.at_level(logging.WARNING, logger="explore_local.providers.nominatim"):
            candidates = await adapter.geocode("London")
        assert [c.display_name for c in candidates] == ["London, England", "London, Ontario"]
        assert caplog.text.count("Skipping geocoding candidate") == 3

    @pytest.mark.asyncio()
    async def test_out_of_range_candidate(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json=[{"lat": "123", "lon": "0"}]))
        with pytest.raises(GeocodingServiceError, match="out of range"):
            await adapter.geocode("London")

    @pytest.mark.asyncio()
    async def test_invalid_json(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(GeocodingServiceError, match="not valid JSON"):
            await adapter.geocode("London")

    @pytest.mark.asyncio()
    async def test_undecodable_body(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, content=b"\xff\xfe\xfa{garbage"))
        with pytest.raises(GeocodingServiceError, match="not valid JSON"):
            await adapter.geocode("London")
