"""Shared helper functions used by the coordinator and the Functions app."""

from __future__ import annotations

from explore_local.core.config import ExploreConfig
from explore_local.models.provider import ProviderConfig
from explore_local.providers.nominatim import NOMINATIM
from explore_local.providers.overpass import OVERPASS
from explore_local.providers.wikipedia import WIKIPEDIA


def build_provider_config(provider_name: str, config: ExploreConfig) -> ProviderConfig:
    """Build a ``ProviderConfig`` for one adapter from the pipeline configuration.

    Args:
        provider_name: ``"overpass"``, ``"nominatim"`` or ``"wikipedia"``.
        config: Loaded pipeline configuration.

    Returns:
        A populated ``ProviderConfig`` instance.

    Raises:
        ValueError: If the provider name is not one of the built-in adapters.
    """
    endpoints = {
        OVERPASS: (config.overpass_url, {"timeout_s": str(config.overpass_timeout_s)}),
        NOMINATIM: (config.nominatim_url, {"limit": str(config.geocoder_result_limit)}),
        WIKIPEDIA: (config.wikipedia_api_url, {"thumbnail_px": str(config.thumbnail_px)}),
    }
    if provider_name not in endpoints:
        available = ", ".join(sorted(endpoints))
        msg = f"Unknown provider: {provider_name!r}. Available: {available}"
        raise ValueError(msg)

    api_base_url, extra_params = endpoints[provider_name]
    return ProviderConfig(
        name=provider_name,
        api_base_url=api_base_url,
        timeout_s=config.http_timeout_s,
        user_agent=config.user_agent,
        extra_params=extra_params,
    )


def parse_optional_float(raw: str | None) -> float | None:
    """Parse a query-string number; blank or missing is ``None``.

    Raises:
        ValueError: If *raw* is present but not a number.
    """
    if raw is None or not raw.strip():
        return None
    return float(raw)
