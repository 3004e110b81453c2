"""Pipeline configuration loaded from environment variables.

All configuration values have sensible defaults, so the in-process API
works without any environment at all.  Hosts (the Functions app, local
scripts) call ``ExploreConfig.from_env()`` once at startup.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range or an endpoint is empty.  This
    catches bad configuration at startup rather than mid-search.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from explore_local.core.constants import (
    DEFAULT_GEOCODER_RESULT_LIMIT,
    DEFAULT_HTTP_TIMEOUT_S,
    DEFAULT_NOMINATIM_URL,
    DEFAULT_OVERPASS_TIMEOUT_S,
    DEFAULT_OVERPASS_URL,
    DEFAULT_SEARCH_RADIUS_M,
    DEFAULT_THUMBNAIL_PX,
    DEFAULT_USER_AGENT,
    DEFAULT_WIKIPEDIA_API_URL,
)
from explore_local.core.exceptions import ExploreError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigValidationError(ExploreError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ExploreConfig:
    """Immutable pipeline configuration.

    Loaded once at startup and handed to ``build_coordinator``.

    Attributes:
        overpass_url: Overpass API interpreter endpoint.
        nominatim_url: Nominatim base URL (``/search`` is appended).
        wikipedia_api_url: MediaWiki action API endpoint.
        search_radius_m: Search radius around the center in metres.
        overpass_timeout_s: Server-side timeout hint in each Overpass query.
        http_timeout_s: Client socket timeout for every outbound request.
        geocoder_result_limit: Candidates requested from the geocoder.
        thumbnail_px: Requested Wikipedia thumbnail width in pixels.
        user_agent: User-Agent header sent with every request.
        log_level: Level for the ``explore_local`` logger.
    """

    overpass_url: str = DEFAULT_OVERPASS_URL
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    wikipedia_api_url: str = DEFAULT_WIKIPEDIA_API_URL
    search_radius_m: int = DEFAULT_SEARCH_RADIUS_M
    overpass_timeout_s: int = DEFAULT_OVERPASS_TIMEOUT_S
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    geocoder_result_limit: int = DEFAULT_GEOCODER_RESULT_LIMIT
    thumbnail_px: int = DEFAULT_THUMBNAIL_PX
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ExploreConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``SEARCH_RADIUS_M=abc``).
        """
        config = cls(
            overpass_url=os.getenv("OVERPASS_URL", DEFAULT_OVERPASS_URL),
            nominatim_url=os.getenv("NOMINATIM_URL", DEFAULT_NOMINATIM_URL),
            wikipedia_api_url=os.getenv("WIKIPEDIA_API_URL", DEFAULT_WIKIPEDIA_API_URL),
            search_radius_m=int(os.getenv("SEARCH_RADIUS_M", str(DEFAULT_SEARCH_RADIUS_M))),
            overpass_timeout_s=int(
                os.getenv("OVERPASS_TIMEOUT_S", str(DEFAULT_OVERPASS_TIMEOUT_S))
            ),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", str(DEFAULT_HTTP_TIMEOUT_S))),
            geocoder_result_limit=int(
                os.getenv("GEOCODER_RESULT_LIMIT", str(DEFAULT_GEOCODER_RESULT_LIMIT))
            ),
            thumbnail_px=int(os.getenv("WIKIPEDIA_THUMBNAIL_PX", str(DEFAULT_THUMBNAIL_PX))),
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config


def _validate(config: ExploreConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    for key, value in (
        ("OVERPASS_URL", config.overpass_url),
        ("NOMINATIM_URL", config.nominatim_url),
        ("WIKIPEDIA_API_URL", config.wikipedia_api_url),
        ("USER_AGENT", config.user_agent),
    ):
        if not value:
            raise ConfigValidationError(key, value, "must not be empty")

    if config.search_radius_m <= 0:
        raise ConfigValidationError(
            "SEARCH_RADIUS_M",
            config.search_radius_m,
            "must be > 0 (metres)",
        )

    if config.overpass_timeout_s <= 0:
        raise ConfigValidationError(
            "OVERPASS_TIMEOUT_S",
            config.overpass_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            "HTTP_TIMEOUT_S",
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )

    if not 1 <= config.geocoder_result_limit <= 50:
        raise ConfigValidationError(
            "GEOCODER_RESULT_LIMIT",
            config.geocoder_result_limit,
            "must be between 1 and 50",
        )

    if config.thumbnail_px <= 0:
        raise ConfigValidationError(
            "WIKIPEDIA_THUMBNAIL_PX",
            config.thumbnail_px,
            "must be > 0 (pixels)",
        )

    if config.log_level not in _LOG_LEVELS:
        raise ConfigValidationError(
            "LOG_LEVEL",
            config.log_level,
            f"must be one of {', '.join(sorted(_LOG_LEVELS))}",
        )
