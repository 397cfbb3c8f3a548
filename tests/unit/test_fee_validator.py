"""Tests for fee parameter validation

Coverage:
- Fee rate bounds (0..10000 bps)
- Base fee sign
- Integer-only inputs (bool, str, fractional rejected)
- All four fields checked before a verdict
- Configured ceiling
"""

from decimal import Decimal

import pytest

from supplier_registration.core.domain.registration import FeeParameters, RawRegistrationInput
from supplier_registration.validation import (
    FeeParameterValidator,
    FeeValidatorConfig,
    InvalidFeeParameter,
)


# =============================================================================
# FIXTURES
# =============================================================================


def make_input(**overrides) -> RawRegistrationInput:
    values = dict(
        inbound_fee_rate=10,
        inbound_base_fee=500,
        outbound_fee_rate=10,
        outbound_base_fee=500,
        liquidity_amount="0.05",
        network_fee_budget="0.0001",
    )
    values.update(overrides)
    return RawRegistrationInput(**values)


@pytest.fixture
def validator():
    """Validator with default config."""
    return FeeParameterValidator()


# =============================================================================
# TESTS
# =============================================================================


class TestAcceptedFees:
    """Inputs that pass"""

    def test_defaults_pass(self, validator):
        fees = validator.validate(make_input())
        assert fees == FeeParameters(
            inbound_fee_rate=10,
            inbound_base_fee=500,
            outbound_fee_rate=10,
            outbound_base_fee=500,
        )

    def test_fee_rate_upper_bound_inclusive(self, validator):
        fees = validator.validate(make_input(inbound_fee_rate=10_000, outbound_fee_rate=10_000))
        assert fees.inbound_fee_rate == 10_000
        assert fees.outbound_fee_rate == 10_000

    def test_zero_everything_passes(self, validator):
        fees = validator.validate(
            make_input(inbound_fee_rate=0, inbound_base_fee=0, outbound_fee_rate=0, outbound_base_fee=0)
        )
        assert fees == FeeParameters(0, 0, 0, 0)

    def test_integral_float_becomes_int(self, validator):
        """Number prompts deliver 10.0 for 10"""
        fees = validator.validate(make_input(inbound_fee_rate=10.0, inbound_base_fee=500.0))
        assert fees.inbound_fee_rate == 10
        assert isinstance(fees.inbound_fee_rate, int)
        assert isinstance(fees.inbound_base_fee, int)

    def test_whole_number_text_and_decimal_accepted(self, validator):
        """Prompts may hand answers over as text or Decimal"""
        fees = validator.validate(
            make_input(
                inbound_fee_rate="10",
                inbound_base_fee=Decimal("500"),
                outbound_fee_rate=" 25 ",
                outbound_base_fee=Decimal("5E+2"),
            )
        )
        assert fees == FeeParameters(
            inbound_fee_rate=10,
            inbound_base_fee=500,
            outbound_fee_rate=25,
            outbound_base_fee=500,
        )
        assert all(type(v) is int for v in vars(fees).values())

    def test_text_answers_still_range_checked(self, validator):
        result = validator.evaluate(make_input(inbound_fee_rate="10001", outbound_base_fee="-1"))

        assert not result.valid
        assert [(v.field, v.constraint) for v in result.violations] == [
            ("inbound_fee_rate", "max_fee_rate"),
            ("outbound_base_fee", "non_negative"),
        ]

    def test_amount_fields_are_not_checked_here(self, validator):
        """Liquidity and network fee are the assembler's concern"""
        fees = validator.validate(make_input(liquidity_amount="abc", network_fee_budget=None))
        assert fees.inbound_fee_rate == 10


class TestRejectedFees:
    """Inputs that fail"""

    def test_fee_rate_above_100_percent(self, validator):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(inbound_fee_rate=10_001))

        (violation,) = exc_info.value.violations
        assert violation.field == "inbound_fee_rate"
        assert violation.constraint == "max_fee_rate"
        assert violation.value == 10_001
        assert "inbound_fee_rate" in str(exc_info.value)
        assert "10000" in str(exc_info.value)

    def test_negative_base_fee(self, validator):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(outbound_base_fee=-1))

        (violation,) = exc_info.value.violations
        assert violation.field == "outbound_base_fee"
        assert violation.constraint == "non_negative"

    def test_negative_fee_rate(self, validator):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(outbound_fee_rate=-5))
        assert exc_info.value.fields == ("outbound_fee_rate",)

    @pytest.mark.parametrize("bad", [True, "ten", "10.5", 10.5, Decimal("10.5"), "1_0"])
    def test_non_integer_fee_rate(self, validator, bad):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(inbound_fee_rate=bad))

        (violation,) = exc_info.value.violations
        assert violation.constraint == "integer"
        assert "basis points" in violation.message

    @pytest.mark.parametrize("bad", [Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite_decimal(self, validator, bad):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(inbound_base_fee=bad))

        (violation,) = exc_info.value.violations
        assert violation.constraint == "integer"
        assert "satoshis" in violation.message

    def test_fractional_negative_base_fee_reports_both_constraints(self, validator):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(inbound_base_fee=-1.5))

        constraints = {v.constraint for v in exc_info.value.violations}
        assert constraints == {"integer", "non_negative"}

    def test_missing_field(self, validator):
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(outbound_fee_rate=None))

        (violation,) = exc_info.value.violations
        assert violation.field == "outbound_fee_rate"
        assert violation.constraint == "required"


class TestNoPartialValidation:
    """All four fields are examined before a verdict"""

    def test_every_field_reported(self, validator):
        raw = make_input(
            inbound_fee_rate=10_001,
            inbound_base_fee=-1,
            outbound_fee_rate=-5,
            outbound_base_fee=1.5,
        )
        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(raw)

        assert exc_info.value.fields == (
            "inbound_fee_rate",
            "inbound_base_fee",
            "outbound_fee_rate",
            "outbound_base_fee",
        )
        assert [v.constraint for v in exc_info.value.violations] == [
            "max_fee_rate",
            "non_negative",
            "non_negative",
            "integer",
        ]

    def test_evaluate_does_not_raise(self, validator):
        result = validator.evaluate(make_input(inbound_fee_rate=10_001, outbound_base_fee=-1))

        assert not result.valid
        assert result.fees is None
        assert len(result.violations) == 2
        assert "inbound_fee_rate=max_fee_rate" in result.details

    def test_evaluate_pass(self, validator):
        result = validator.evaluate(make_input())
        assert result.valid
        assert result.violations == ()
        assert result.details == "PASS"


class TestConfiguredCeiling:
    """FeeValidatorConfig"""

    def test_tighter_ceiling(self):
        validator = FeeParameterValidator(FeeValidatorConfig(max_fee_rate_bps=500))

        with pytest.raises(InvalidFeeParameter) as exc_info:
            validator.validate(make_input(outbound_fee_rate=600))

        (violation,) = exc_info.value.violations
        assert violation.field == "outbound_fee_rate"
        assert violation.constraint == "max_fee_rate"
        assert "<= 500 bps" in violation.message

    def test_tighter_ceiling_boundary(self):
        validator = FeeParameterValidator(FeeValidatorConfig(max_fee_rate_bps=500))
        assert validator.validate(make_input(outbound_fee_rate=500)).outbound_fee_rate == 500

    def test_ceiling_cannot_exceed_100_percent(self):
        with pytest.raises(ValueError, match="max_fee_rate_bps"):
            FeeValidatorConfig(max_fee_rate_bps=10_001)
