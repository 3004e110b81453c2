"""Shared validation for domain model invariants.

Models call these from ``__post_init__`` so an instance that exists is
always valid; there is no separate ``validate()`` step.
"""

from __future__ import annotations

import math

from explore_local.core.exceptions import ValidationError


class ModelValidationError(ValueError, ValidationError):
    """Raised when a domain model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        ValidationError.__init__(self, formatted)


def check_range(model: str, field_name: str, value: float, lo: float, hi: float) -> None:
    """Raise `ModelValidationError` if *value* is not a finite number in [lo, hi]."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ModelValidationError(model, field_name, value, "must be a number")
    if not math.isfinite(value) or value < lo or value > hi:
        raise ModelValidationError(model, field_name, value, f"must be between {lo} and {hi}")


def check_positive(model: str, field_name: str, value: float | int) -> None:
    """Raise `ModelValidationError` if *value* is not > 0."""
    if not value > 0:
        raise ModelValidationError(model, field_name, value, "must be > 0")


def check_non_empty(model: str, field_name: str, value: str) -> None:
    """Raise `ModelValidationError` if *value* is empty or blank."""
    if not value or not value.strip():
        raise ModelValidationError(model, field_name, value, "must not be empty")
