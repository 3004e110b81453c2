"""Thin ingress boundary helpers for the HTTP entrypoint.

Turns the query string of ``GET /api/pois`` into a location intent plus
the device location provider for that one request, so that
``function_app.py`` contains only bindings and handoff.

Accepted parameters:
    ``city``:           free-text place name (city mode).
    ``lat`` / ``lon``:  a geolocation fix relayed by the client (device mode).
    ``location_error``: the client's geolocation error message, when
        the browser denied or failed the request.

With neither ``city`` nor a fix the request runs in device mode and the
cycle ends with ``LocationUnavailable`` (an empty result), matching
what the UI shows when geolocation is unavailable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from explore_local.core.exceptions import ValidationError
from explore_local.models.location import Coordinate, LocationIntent
from explore_local.models.validation import ModelValidationError
from explore_local.providers.device import StaticLocationProvider
from explore_local.utils.helpers import parse_optional_float

logger = logging.getLogger("explore_local.core.ingress")


class RequestValidationError(ValidationError):
    """The search request's parameters are malformed."""

    default_stage = "ingress"
    default_code = "INVALID_SEARCH_REQUEST"


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """A parsed search request.

    Attributes:
        intent: Where to search.
        location_provider: Device location adapter for this request
            (``None`` in city mode).
    """

    intent: LocationIntent
    location_provider: StaticLocationProvider | None = None


def parse_search_request(params: Mapping[str, str]) -> SearchRequest:
    """Build a ``SearchRequest`` from query-string parameters.

    Raises:
        RequestValidationError: If both modes are requested, only one of
            ``lat``/``lon`` is given, or a value is not a valid coordinate.
    """
    city = (params.get("city") or "").strip()

    try:
        lat = parse_optional_float(params.get("lat"))
        lon = parse_optional_float(params.get("lon"))
    except ValueError as exc:
        msg = f"lat/lon must be numbers: {exc}"
        raise RequestValidationError(msg) from exc

    has_fix = lat is not None or lon is not None

    if city and has_fix:
        msg = "Specify either 'city' or 'lat'/'lon', not both"
        raise RequestValidationError(msg)

    if city:
        return SearchRequest(intent=LocationIntent.city(city))

    if has_fix:
        if lat is None or lon is None:
            msg = "'lat' and 'lon' must be given together"
            raise RequestValidationError(msg)
        try:
            fix = Coordinate(lat, lon)
        except ModelValidationError as exc:
            raise RequestValidationError(str(exc)) from exc
        return SearchRequest(
            intent=LocationIntent.device(),
            location_provider=StaticLocationProvider(fix),
        )

    reason = (params.get("location_error") or "").strip() or "no position fix was provided"
    logger.debug("Search request without a fix | reason=%s", reason)
    return SearchRequest(
        intent=LocationIntent.device(),
        location_provider=StaticLocationProvider.unavailable(reason),
    )
