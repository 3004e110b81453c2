"""Configuration model for external service adapters."""

from __future__ import annotations

from dataclasses import dataclass, field

from explore_local.core.config import ConfigValidationError
from explore_local.core.constants import DEFAULT_HTTP_TIMEOUT_S, DEFAULT_USER_AGENT
from explore_local.models.validation import check_non_empty, check_positive


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Configuration for one external service adapter.

    Attributes:
        name: Adapter identifier (``"overpass"``, ``"nominatim"`` ...).
        api_base_url: Service endpoint; empty means the adapter default.
        timeout_s: Client socket timeout in seconds.
        user_agent: User-Agent header sent with every request.
        extra_params: Adapter-specific settings (all string-valued).
    """

    name: str
    api_base_url: str = ""
    timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT
    extra_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        check_non_empty("ProviderConfig", "name", self.name)
        check_positive("ProviderConfig", "timeout_s", self.timeout_s)

    def int_param(self, key: str, default: int) -> int:
        """Read an integer from ``extra_params``, falling back to *default* when absent.

        Adapters read their parameters once at construction, so a bad
        value fails when the coordinator is built, not mid-search.

        Raises:
            ConfigValidationError: If the value is present but not an integer.
        """
        raw = self.extra_params.get(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigValidationError(
                f"{self.name}.{key}", raw, "must be an integer"
            ) from exc
