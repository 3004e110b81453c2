"""Device location providers.

The pipeline runs server-side, so the "device" fix is whatever the
host relays from the client (for the Functions app: the browser's
geolocation callback, sent as ``lat``/``lon`` query parameters).
"""

from __future__ import annotations

import logging

from explore_local.models.location import Coordinate
from explore_local.providers.base import LocationProvider, LocationUnavailable

logger = logging.getLogger(__name__)

DEVICE = "device"


class StaticLocationProvider(LocationProvider):
    """Serves a single pre-obtained fix, or reports why there is none.

    Args:
        fix: The position fix, or ``None`` if the platform denied or
            failed the request.
        reason: Why no fix is available (used in the error message).
    """

    def __init__(self, fix: Coordinate | None, *, reason: str = "") -> None:
        self._fix = fix
        self._reason = reason or "no position fix was provided"

    @classmethod
    def unavailable(cls, reason: str) -> StaticLocationProvider:
        return cls(None, reason=reason)

    async def locate(self) -> Coordinate:
        if self._fix is None:
            logger.info("Device location unavailable | reason=%s", self._reason)
            raise LocationUnavailable(DEVICE, self._reason)
        return self._fix
