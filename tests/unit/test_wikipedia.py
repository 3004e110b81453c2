"""Tests for the WikipediaAdapter (knowledge lookup over ``httpx.MockTransport``)."""

from __future__ import annotations

import httpx
import pytest

from explore_local.models.provider import ProviderConfig
from explore_local.providers.base import EnrichmentLookupError, EnrichmentResponseError
from explore_local.providers.wikipedia import WIKIPEDIA, WikipediaAdapter

_URL = "https://wiki.test/w/api.php"


def _adapter(handler) -> WikipediaAdapter:  # type: ignore[no-untyped-def]
    config = ProviderConfig(
        name=WIKIPEDIA,
        api_base_url=_URL,
        user_agent="explore-local-tests",
        extra_params={"thumbnail_px": "200"},
    )
    return WikipediaAdapter(config, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def _pages(*pages: dict) -> dict:  # type: ignore[type-arg]
    return {"batchcomplete": "", "query": {"pages": {str(p["pageid"]): p for p in pages}}}


class TestWikipediaLookup:
    @pytest.mark.asyncio()
    async def test_request_parameters(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"batchcomplete": ""})

        await _adapter(handler).lookup("Old Fort")

        params = seen[0].url.params
        assert params["action"] == "query"
        assert params["generator"] == "search"
        assert params["gsrsearch"] == "Old Fort"
        assert params["prop"] == "pageimages|description|info"
        assert params["inprop"] == "url"
        assert params["pithumbsize"] == "200"
        assert seen[0].headers["User-Agent"] == "explore-local-tests"

    @pytest.mark.asyncio()
    async def test_top_ranked_page_selected(self) -> None:
        payload = _pages(
            {"pageid": 10, "index": 2, "title": "Old Fort (film)", "fullurl": "https://w/Old_Fort_(film)"},
            {
                "pageid": 11,
                "index": 1,
                "title": "Old Fort",
                "description": "Fortification",
                "thumbnail": {"source": "https://img/old_fort.jpg", "width": 200, "height": 150},
                "fullurl": "https://w/Old_Fort",
            },
        )
        summary = await _adapter(lambda request: httpx.Response(200, json=payload)).lookup("Old Fort")

        assert summary is not None
        assert summary.title == "Old Fort"
        assert summary.description == "Fortification"
        assert summary.thumbnail_url == "https://img/old_fort.jpg"
        assert summary.page_url == "https://w/Old_Fort"

    @pytest.mark.asyncio()
    async def test_mapping_order_without_index(self) -> None:
        payload = _pages(
            {"pageid": 5, "title": "First", "fullurl": "https://w/First"},
            {"pageid": 6, "title": "Second", "fullurl": "https://w/Second"},
        )
        summary = await _adapter(lambda request: httpx.Response(200, json=payload)).lookup("x")
        assert summary is not None
        assert summary.title == "First"

    @pytest.mark.asyncio()
    async def test_page_without_optional_fields(self) -> None:
        payload = _pages({"pageid": 5, "index": 1, "title": "Bare", "description": ""})
        summary = await _adapter(lambda request: httpx.Response(200, json=payload)).lookup("Bare")
        assert summary is not None
        assert summary.description is None
        assert summary.thumbnail_url is None
        assert summary.page_url is None

    @pytest.mark.asyncio()
    async def test_no_hits_returns_none(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json={"batchcomplete": ""}))
        assert await adapter.lookup("Unnamed place") is None

    @pytest.mark.asyncio()
    async def test_api_error_payload(self) -> None:
        payload = {"error": {"code": "badvalue", "info": "Unrecognized value"}}
        adapter = _adapter(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(EnrichmentLookupError) as exc_info:
            await adapter.lookup("Old Fort")
        assert exc_info.value.retryable is False
        assert exc_info.value.code == "ENRICHMENT_LOOKUP_FAILED"

    @pytest.mark.asyncio()
    async def test_pages_not_mapping(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json={"query": {"pages": []}}))
        with pytest.raises(EnrichmentResponseError, match="no pages mapping") as exc_info:
            await adapter.lookup("Old Fort")
        assert exc_info.value.category == "contract"
        assert isinstance(exc_info.value, EnrichmentLookupError)

    @pytest.mark.asyncio()
    async def test_undecodable_body(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, content=b"\xff\xfe\xfa{garbage"))
        with pytest.raises(EnrichmentLookupError, match="not valid JSON"):
            await adapter.lookup("Old Fort")

    @pytest.mark.asyncio()
    async def test_http_error(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(503))
        with pytest.raises(EnrichmentLookupError) as exc_info:
            await adapter.lookup("Old Fort")
        assert exc_info.value.retryable is True
        assert exc_info.value.provider == WIKIPEDIA
