"""Tests for the OverpassAdapter.

Wire-level tests use ``httpx.MockTransport`` so the real request
encoding and response parsing run without network access.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import parse_qs

import httpx
import pytest

from explore_local.activities.build_query import build_query
from explore_local.core.config import ConfigValidationError
from explore_local.models.location import Coordinate
from explore_local.models.provider import ProviderConfig
from explore_local.models.query import GeometryKind
from explore_local.providers.base import SpatialQueryError, SpatialQueryResponseError
from explore_local.providers.overpass import OVERPASS, OverpassAdapter, parse_elements

_URL = "https://overpass.test/api/interpreter"


def _adapter(handler, **extra: str) -> OverpassAdapter:  # type: ignore[no-untyped-def]
    config = ProviderConfig(
        name=OVERPASS,
        api_base_url=_URL,
        user_agent="explore-local-tests",
        extra_params=dict(extra),
    )
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OverpassAdapter(config, client=client)


_SPEC = build_query(Coordinate(51.505, -0.09))


class TestOverpassQuery:
    @pytest.mark.asyncio()
    async def test_posts_query_and_parses_elements(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "elements": [
                        {"type": "node", "id": 1, "lat": 51.51, "lon": -0.08, "tags": {"name": "Old Fort"}},
                        {"type": "way", "id": 2, "center": {"lat": 51.50, "lon": -0.095}},
                    ]
                },
            )

        features = await _adapter(handler).query(_SPEC)

        assert [(f.kind, f.id) for f in features] == [(GeometryKind.POINT, 1), (GeometryKind.AREA, 2)]
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == _URL
        assert request.headers["User-Agent"] == "explore-local-tests"
        body = parse_qs(request.content.decode())
        assert body["data"][0].startswith("[out:json][timeout:25];")
        assert "out center;" in body["data"][0]

    @pytest.mark.asyncio()
    async def test_timeout_param_in_query_header(self) -> None:
        bodies: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(parse_qs(request.content.decode())["data"][0])
            return httpx.Response(200, json={"elements": []})

        await _adapter(handler, timeout_s="90").query(_SPEC)
        assert bodies[0].startswith("[out:json][timeout:90];")

    @pytest.mark.asyncio()
    async def test_server_error_is_retryable(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(504))
        with pytest.raises(SpatialQueryError) as exc_info:
            await adapter.query(_SPEC)
        assert exc_info.value.retryable is True
        assert "504" in str(exc_info.value)

    @pytest.mark.asyncio()
    async def test_bad_request_not_retryable(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(400, text="parse error"))
        with pytest.raises(SpatialQueryError) as exc_info:
            await adapter.query(_SPEC)
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio()
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SpatialQueryError, match="request failed"):
            await _adapter(handler).query(_SPEC)

    @pytest.mark.asyncio()
    async def test_invalid_json(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, text="<html>busy</html>"))
        with pytest.raises(SpatialQueryError, match="not valid JSON"):
            await adapter.query(_SPEC)

    @pytest.mark.asyncio()
    async def test_undecodable_body(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, content=b"\xff\xfe\xfa{garbage"))
        with pytest.raises(SpatialQueryError, match="not valid JSON"):
            await adapter.query(_SPEC)

    def test_non_integer_timeout_fails_at_construction(self) -> None:
        with pytest.raises(ConfigValidationError, match="overpass.timeout_s"):
            _adapter(lambda request: httpx.Response(200), timeout_s="soon")


class TestParseElements:
    def test_missing_elements_fails(self) -> None:
        with pytest.raises(SpatialQueryError) as exc_info:
            parse_elements({"version": 0.6})
        err = exc_info.value
        assert isinstance(err, SpatialQueryResponseError)
        assert err.retryable is False
        assert err.code == "SPATIAL_QUERY_FAILED"
        assert err.category == "contract"

    def test_non_object_fails(self) -> None:
        with pytest.raises(SpatialQueryError):
            parse_elements([])

    def test_bad_elements_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        payload = {
            "elements": [
                {"type": "node", "lat": 1.0, "lon": 1.0},
                "garbage",
                {"type": "node", "id": "abc"},
                {"type": "node", "id": 3, "lat": 1.0, "lon": 1.0},
            ]
        }
        with caplog.at_level(logging.WARNING, logger="explore_local.providers.overpass"):
            features = parse_elements(payload)
        assert [f.id for f in features] == [3]
        assert caplog.text.count("Skipping unparseable Overpass element") == 3

    def test_remark_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        payload = {"elements": [], "remark": "runtime error: Query timed out"}
        with caplog.at_level(logging.WARNING, logger="explore_local.providers.overpass"):
            assert parse_elements(payload) == []
        assert "Query timed out" in caplog.text

    def test_relation_element_from_json_text(self) -> None:
        text = json.dumps({"elements": [{"type": "relation", "id": 9, "center": {"lat": 0, "lon": 0}}]})
        (feature,) = parse_elements(json.loads(text))
        assert feature.kind is GeometryKind.MULTI_AREA
