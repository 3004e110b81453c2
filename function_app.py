"""Azure Functions entry point — Explore Local POI search.

Registers the HTTP API used by the map/list front end, using the Python
v2 programming model.

All business logic lives in the explore_local package. This file is
purely the wiring layer between the HTTP binding and application code.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

import azure.functions as func

from explore_local.core.config import ExploreConfig
from explore_local.core.ingress import RequestValidationError, parse_search_request
from explore_local.core.logging import configure_logging
from explore_local.orchestrators.search_pipeline import SearchCoordinator, build_coordinator
from explore_local.orchestrators.sink import InMemoryResultSink

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger("explore_local.function_app")

_config = ExploreConfig.from_env()
configure_logging(_config.log_level)


def create_coordinator(sink: InMemoryResultSink) -> SearchCoordinator:
    """Build the coordinator for one request (patched in tests)."""
    return build_coordinator(_config, sink=sink)


def _json_response(body: object, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# HTTP: POI search
# ---------------------------------------------------------------------------


@app.function_name("search_pois")
@app.route(route="pois", methods=["GET"])
async def search_pois(req: func.HttpRequest) -> func.HttpResponse:
    """``GET /api/pois``: run one search cycle and return the result set as JSON."""
    status_code, body = await run_search(req.params)
    return _json_response(body, status_code=status_code)


async def run_search(params: Mapping[str, str]) -> tuple[int, dict[str, object]]:
    """Parse *params*, run one search cycle and build the response body.

    ``?city=<name>`` searches around a geocoded place; ``?lat=&lon=``
    searches around a device fix.  Service failures still answer 200
    with an empty ``"failed"`` result set so the UI shows its
    "no results" state; only malformed requests answer 400.
    """
    try:
        request = parse_search_request(params)
    except RequestValidationError as exc:
        logger.info("Rejected search request | error=%s", exc)
        return 400, {"error": exc.to_error_dict()}

    sink = InMemoryResultSink()
    coordinator = create_coordinator(sink)
    result = await coordinator.search(
        request.intent,
        location_provider=request.location_provider,
    )

    logger.info(
        "search_pois completed | intent=%s | status=%s | pois=%d",
        request.intent.describe(),
        result.status.value,
        len(result),
    )
    return 200, dict(result.to_dict())
