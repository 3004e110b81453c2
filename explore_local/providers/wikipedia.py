"""Wikipedia adapter (MediaWiki action API knowledge lookup).

One request per search term:
``action=query&generator=search&gsrsearch=<term>&prop=pageimages|description|info&inprop=url``.
The response maps page id → page; the generator's ``index`` field gives
the search ranking, so the top page is the one with the lowest index
(mapping order when the field is absent).  No fuzzy matching against
the search term is attempted.

References:
    https://www.mediawiki.org/wiki/API:Search
    https://www.mediawiki.org/wiki/API:Pageimages
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from explore_local.core.constants import DEFAULT_THUMBNAIL_PX, DEFAULT_WIKIPEDIA_API_URL
from explore_local.models.poi import PageSummary
from explore_local.providers.base import (
    EnrichmentLookupError,
    EnrichmentResponseError,
    HttpAdapter,
    KnowledgeProvider,
)

if TYPE_CHECKING:
    from explore_local.models.provider import ProviderConfig

logger = logging.getLogger(__name__)

WIKIPEDIA = "wikipedia"


class WikipediaAdapter(HttpAdapter, KnowledgeProvider):
    """MediaWiki search + page-props client.

    ``extra_params["thumbnail_px"]`` sets the requested thumbnail width.
    """

    def __init__(self, config: ProviderConfig, *, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(config, client=client)
        self._thumbnail_px = config.int_param("thumbnail_px", DEFAULT_THUMBNAIL_PX)

    async def lookup(self, search_term: str) -> PageSummary | None:
        url = self.config.api_base_url or DEFAULT_WIKIPEDIA_API_URL
        params = {
            "action": "query",
            "format": "json",
            "prop": "pageimages|description|info",
            "inprop": "url",
            "piprop": "thumbnail",
            "pithumbsize": self._thumbnail_px,
            "generator": "search",
            "gsrsearch": search_term,
        }

        try:
            async with self._http() as client:
                response = await client.get(url, params=params, headers=self._headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            msg = f"Wikipedia lookup failed for {search_term!r}: {exc}"
            raise EnrichmentLookupError(self.name, msg) from exc
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for an undecodable body.
            msg = f"Wikipedia response for {search_term!r} is not valid JSON: {exc}"
            raise EnrichmentLookupError(self.name, msg) from exc

        page = self._top_page(payload, search_term)
        if page is None:
            logger.debug("No Wikipedia page | term=%s", search_term)
            return None
        return _page_to_summary(page)

    def _top_page(self, payload: object, search_term: str) -> Mapping[str, Any] | None:
        if not isinstance(payload, Mapping):
            msg = f"Wikipedia response for {search_term!r} is not an object"
            raise EnrichmentResponseError(self.name, msg)

        if "error" in payload:
            msg = f"Wikipedia API error for {search_term!r}: {payload['error']!r:.200}"
            raise EnrichmentLookupError(self.name, msg, retryable=False)

        # No "query" key at all is how MediaWiki reports zero search hits.
        query = payload.get("query")
        if query is None:
            return None
        pages = query.get("pages") if isinstance(query, Mapping) else None
        if not isinstance(pages, Mapping):
            msg = f"Wikipedia response for {search_term!r} has no pages mapping"
            raise EnrichmentResponseError(self.name, msg)

        ranked = [p for p in pages.values() if isinstance(p, Mapping)]
        if not ranked:
            return None
        return min(ranked, key=_search_rank)


def _search_rank(page: Mapping[str, Any]) -> float:
    index = page.get("index")
    return float(index) if isinstance(index, int | float) else float("inf")


def _page_to_summary(page: Mapping[str, Any]) -> PageSummary:
    thumbnail = page.get("thumbnail")
    thumbnail_url = thumbnail.get("source") if isinstance(thumbnail, Mapping) else None
    return PageSummary(
        title=str(page.get("title", "")),
        description=_optional_str(page.get("description")),
        thumbnail_url=_optional_str(thumbnail_url),
        page_url=_optional_str(page.get("fullurl")),
    )


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None
