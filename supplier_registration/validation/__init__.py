"""Validation: checks applied to operator input before conversion."""

from .fee_parameters import (
    FeeParameterValidator,
    FeeValidationResult,
    FeeValidatorConfig,
    FeeViolation,
    InvalidFeeParameter,
)

__all__ = [
    "FeeParameterValidator",
    "FeeValidationResult",
    "FeeValidatorConfig",
    "FeeViolation",
    "InvalidFeeParameter",
]
