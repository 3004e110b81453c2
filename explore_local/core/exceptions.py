"""Unified exception taxonomy.

Provides a shared base exception hierarchy for the search pipeline and
its service adapters. Every domain exception inherits from
``ExploreError`` and carries structured context fields so that a failed
search cycle can be reported consistently to the result sink and logs.

Taxonomy categories
-------------------
- ``ValidationError``: input or request violations, never retryable.
- ``PermanentError``: unrecoverable domain failures, not retryable.
- ``ContractError``: response shape drift from an external service.

Errors outside these categories (transport failures from the service
adapters) are classified by their ``retryable`` flag.

``retryable`` is informational only: the pipeline never retries on its
own, a user-initiated re-search is the only recovery path.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for the result sink and logging.
"""

from __future__ import annotations


class ExploreError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"resolve_coordinate"``, ``"execute_query"``).
        code: Machine-readable error code (e.g. ``"PLACE_NOT_FOUND"``).
        retryable: Whether a repeat of the same request could succeed.
        correlation_id: Search cycle token the error belongs to.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    #: Fixed category for a category base class; ``None`` defers to ``retryable``.
    category_name: str | None = None

    @property
    def category(self) -> str:
        """Return the error category: the class category, else by ``retryable``."""
        for cls in type(self).__mro__:
            name = cls.__dict__.get("category_name")
            if name:
                return name
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ExploreError):
    """Input or domain-model validation failure. Never retryable."""

    category_name = "validation"


class PermanentError(ExploreError):
    """Unrecoverable domain failure (e.g. an unknown place name)."""

    category_name = "permanent"


class ContractError(ExploreError):
    """An external service answered with a payload of the wrong shape."""

    category_name = "contract"
