"""Metadata enrichment activity (fan-out / fan-in).

Looks up every POI by name in the knowledge service, all concurrently,
and copies the top page's description, thumbnail and URL onto the POI.

Failure isolation: each lookup runs in its own task which catches its
own failure, logs it and reports it as an outcome.  No failure reaches
the ``gather`` join, so the batch always completes with every POI
present and in its original order; a POI whose lookup failed simply
keeps its enrichment fields at ``None``.  Cancellation is not caught.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from explore_local.providers.base import EnrichmentLookupError

if TYPE_CHECKING:
    from explore_local.models.poi import POI
    from explore_local.providers.base import KnowledgeProvider

logger = logging.getLogger("explore_local.activities.enrich_metadata")


@dataclass(frozen=True, slots=True)
class EnrichmentOutcome:
    """Result of one per-POI lookup task.

    Attributes:
        poi_key: ``POI.key`` of the looked-up place.
        enriched: Whether any field was attached.
        error: Structured error payload if the lookup failed.
    """

    poi_key: str
    enriched: bool = False
    error: dict[str, object] | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


async def enrich_metadata(pois: list[POI], *, knowledge: KnowledgeProvider) -> list[POI]:
    """Enrich *pois* in place and return the same list.

    Completes only after every lookup has resolved.  Never raises for a
    lookup failure.
    """
    if not pois:
        return pois

    outcomes = await asyncio.gather(*(_enrich_one(poi, knowledge) for poi in pois))

    enriched = sum(1 for o in outcomes if o.enriched)
    failed = sum(1 for o in outcomes if o.failed)
    logger.info(
        "Enrichment complete | pois=%d | enriched=%d | no_match=%d | failed=%d",
        len(pois),
        enriched,
        len(pois) - enriched - failed,
        failed,
    )
    return pois


async def _enrich_one(poi: POI, knowledge: KnowledgeProvider) -> EnrichmentOutcome:
    """Look up one POI; capture any failure as an outcome."""
    try:
        summary = await knowledge.lookup(poi.name)
    except EnrichmentLookupError as exc:
        logger.warning("Enrichment lookup failed | poi=%s | name=%s | error=%s", poi.key, poi.name, exc)
        return EnrichmentOutcome(poi.key, error=exc.to_error_dict())
    except Exception as exc:
        # Any adapter failure stays confined to this POI.
        logger.warning(
            "Enrichment lookup raised unexpectedly | poi=%s | name=%s",
            poi.key,
            poi.name,
            exc_info=True,
        )
        wrapped = EnrichmentLookupError("knowledge", f"{type(exc).__name__}: {exc}")
        return EnrichmentOutcome(poi.key, error=wrapped.to_error_dict())

    if summary is None:
        return EnrichmentOutcome(poi.key)
    return EnrichmentOutcome(poi.key, enriched=poi.apply_summary(summary))
