"""Fee parameter validation

Checks the operator's fee terms before anything is converted or assembled:
- inbound/outbound fee rate: integer basis points in [0, 10000]
- inbound/outbound base fee: non-negative integer satoshis

Every field is checked before a verdict is given, so one failed run reports
all offending fields at once. Structural checks come from the
fee_parameters JSON Schema contract.

Answers typed as text (or Decimal) count when they name a whole number:
"10" and Decimal("500") pass, "10.5" and "ten" do not.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import ValidationError

from supplier_registration.core.contracts import FeeParametersValidator
from supplier_registration.core.domain.registration import FeeParameters, RawRegistrationInput
from supplier_registration.core.domain.units import FEE_RATE_MAX_BPS, ConversionError, parse_decimal


logger = logging.getLogger(__name__)


FEE_RATE_FIELDS: Tuple[str, ...] = ("inbound_fee_rate", "outbound_fee_rate")
BASE_FEE_FIELDS: Tuple[str, ...] = ("inbound_base_fee", "outbound_base_fee")
FEE_FIELDS: Tuple[str, ...] = (
    "inbound_fee_rate",
    "inbound_base_fee",
    "outbound_fee_rate",
    "outbound_base_fee",
)

# jsonschema keyword -> constraint name
_CONSTRAINT_BY_KEYWORD: Dict[str, str] = {
    "required": "required",
    "type": "integer",
    "minimum": "non_negative",
    "maximum": "max_fee_rate",
}


# =============================================================================
# ERRORS / RESULT
# =============================================================================


@dataclass(frozen=True)
class FeeViolation:
    """One violated constraint on one fee field."""

    field: str
    constraint: str
    value: Any
    message: str


class InvalidFeeParameter(ValueError):
    """
    Fee terms rejected; the run must stop before any side effect.

    Attributes:
        violations: Every violated (field, constraint), in field order
    """

    def __init__(self, violations: Tuple[FeeViolation, ...]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(v.field for v in self.violations)


@dataclass(frozen=True)
class FeeValidationResult:
    """Fee validation verdict."""

    valid: bool
    violations: Tuple[FeeViolation, ...]
    fees: Optional[FeeParameters]

    # Details
    details: str


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FeeValidatorConfig:
    """Fee validator configuration.

    max_fee_rate_bps may tighten the 100% ceiling, never raise it.
    """

    max_fee_rate_bps: int = FEE_RATE_MAX_BPS

    def __post_init__(self):
        if not 0 <= self.max_fee_rate_bps <= FEE_RATE_MAX_BPS:
            raise ValueError(
                f"max_fee_rate_bps must be in [0, {FEE_RATE_MAX_BPS}], got {self.max_fee_rate_bps}"
            )


def _as_whole_number(value: Any) -> Any:
    """Integral str/Decimal answers become int; everything else is left to the contract."""
    if isinstance(value, bool) or not isinstance(value, (str, Decimal)):
        return value
    try:
        number = parse_decimal(value)
    except ConversionError:
        # NaN/infinite Decimals are not comparable, the contract sees their text
        return value if isinstance(value, str) else str(value)
    if number != number.to_integral_value():
        return value
    return int(number)


# =============================================================================
# VALIDATOR
# =============================================================================


class FeeParameterValidator:
    """Validates fee rates and base fees of a registration.

    Order of checks:
    1. Contract (required, integer, non-negative, <= 10000 bps)
    2. Configured fee rate ceiling (if tighter than 10000 bps)
    """

    def __init__(self, config: FeeValidatorConfig | None = None):
        self.config = config or FeeValidatorConfig()
        self._contract = FeeParametersValidator()

    def evaluate(self, raw: RawRegistrationInput) -> FeeValidationResult:
        """Check all four fee fields without raising.

        Args:
            raw: Operator answers

        Returns:
            FeeValidationResult with every violation found
        """
        record = {field: _as_whole_number(value) for field, value in raw.fee_record().items()}
        violations = self._collect_violations(record)

        if violations:
            return FeeValidationResult(
                valid=False,
                violations=violations,
                fees=None,
                details=f"{len(violations)} fee violation(s): "
                + ", ".join(f"{v.field}={v.constraint}" for v in violations),
            )

        fees = FeeParameters(
            inbound_fee_rate=int(record["inbound_fee_rate"]),
            inbound_base_fee=int(record["inbound_base_fee"]),
            outbound_fee_rate=int(record["outbound_fee_rate"]),
            outbound_base_fee=int(record["outbound_base_fee"]),
        )
        return FeeValidationResult(valid=True, violations=(), fees=fees, details="PASS")

    def validate(self, raw: RawRegistrationInput) -> FeeParameters:
        """Check all four fee fields.

        Returns:
            FeeParameters with plain ints

        Raises:
            InvalidFeeParameter: At least one field violates a constraint
        """
        result = self.evaluate(raw)
        if not result.valid:
            logger.warning("Fee parameters rejected: %s", result.details)
            raise InvalidFeeParameter(result.violations)
        return result.fees

    def _collect_violations(self, record: Dict[str, Any]) -> Tuple[FeeViolation, ...]:
        found: Dict[Tuple[str, str], FeeViolation] = {}

        for error in self._contract.iter_errors(record):
            for violation in self._from_schema_error(error, record):
                found.setdefault((violation.field, violation.constraint), violation)

        # Tighter configured ceiling
        if self.config.max_fee_rate_bps < FEE_RATE_MAX_BPS:
            for field in FEE_RATE_FIELDS:
                if any(key[0] == field for key in found):
                    continue
                value = record.get(field)
                if value > self.config.max_fee_rate_bps:
                    found[(field, "max_fee_rate")] = self._violation(field, "max_fee_rate", value)

        return tuple(sorted(found.values(), key=lambda v: FEE_FIELDS.index(v.field)))

    def _from_schema_error(
        self, error: ValidationError, record: Dict[str, Any]
    ) -> List[FeeViolation]:
        constraint = _CONSTRAINT_BY_KEYWORD.get(error.validator, error.validator)

        if error.validator == "required":
            return [
                self._violation(field, constraint, None)
                for field in error.validator_value
                if field not in record
            ]

        if not error.path:
            # additionalProperties cannot trigger, fee_record() emits known keys only
            return []

        field = str(error.path[0])
        return [self._violation(field, constraint, error.instance)]

    def _violation(self, field: str, constraint: str, value: Any) -> FeeViolation:
        return FeeViolation(
            field=field,
            constraint=constraint,
            value=value,
            message=f"{field}: {self._describe(field, constraint, value)}",
        )

    def _describe(self, field: str, constraint: str, value: Any) -> str:
        if constraint == "required":
            return "value is required"
        if constraint == "integer":
            unit = "basis points" if field in FEE_RATE_FIELDS else "satoshis"
            return f"must be a whole number of {unit}, got {value!r}"
        if constraint == "non_negative":
            return f"must be >= 0, got {value!r}"
        if constraint == "max_fee_rate":
            ceiling = min(self.config.max_fee_rate_bps, FEE_RATE_MAX_BPS)
            return f"must be <= {ceiling} bps, got {value!r}"
        return f"violates {constraint}, got {value!r}"
