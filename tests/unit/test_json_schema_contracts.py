"""
Tests for JSON Schema Contract Validators

- Schema loading, caching and meta-validation
- Valid records
- required / type / minimum / maximum / additionalProperties violations
- Schema constants agree with the units module
"""

import json

import pytest

from supplier_registration.core.contracts import (
    FeeParametersValidator,
    SchemaLoader,
)
from supplier_registration.core.domain.units import FEE_RATE_MAX_BPS


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_fee_record():
    """Valid fee_parameters record."""
    return {
        "inbound_fee_rate": 10,
        "inbound_base_fee": 500,
        "outbound_fee_rate": 10,
        "outbound_base_fee": 500,
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """SchemaLoader"""

    def test_loads_fee_parameters(self):
        schema = SchemaLoader().load_schema("fee_parameters")
        assert schema["title"] == "fee_parameters"
        assert set(schema["required"]) == {
            "inbound_fee_rate",
            "inbound_base_fee",
            "outbound_fee_rate",
            "outbound_base_fee",
        }

    def test_schema_is_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("fee_parameters") is loader.load_schema("fee_parameters")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_fee_rate_maximum_matches_units(self):
        """The schema ceiling must be the 100% constant"""
        schema = SchemaLoader().load_schema("fee_parameters")
        for field in ("inbound_fee_rate", "outbound_fee_rate"):
            assert schema["properties"][field]["maximum"] == FEE_RATE_MAX_BPS


# =============================================================================
# FEE PARAMETERS CONTRACT
# =============================================================================


class TestFeeParametersContract:
    """fee_parameters.json"""

    @pytest.fixture
    def contract(self):
        return FeeParametersValidator()

    def violations(self, contract, record):
        return sorted((e.validator, list(e.path)) for e in contract.iter_errors(record))

    def test_valid_record(self, contract, valid_fee_record):
        assert self.violations(contract, valid_fee_record) == []

    def test_missing_field(self, contract, valid_fee_record):
        del valid_fee_record["outbound_base_fee"]
        (error,) = contract.iter_errors(valid_fee_record)
        assert error.validator == "required"
        assert "outbound_base_fee" in error.message

    def test_fee_rate_above_maximum(self, contract, valid_fee_record):
        valid_fee_record["inbound_fee_rate"] = 10_001
        assert self.violations(contract, valid_fee_record) == [("maximum", ["inbound_fee_rate"])]

    def test_string_rejected(self, contract, valid_fee_record):
        valid_fee_record["inbound_base_fee"] = "500"
        assert self.violations(contract, valid_fee_record) == [("type", ["inbound_base_fee"])]

    def test_unknown_property_rejected(self, contract, valid_fee_record):
        valid_fee_record["name"] = "supplier"
        assert self.violations(contract, valid_fee_record) == [("additionalProperties", [])]

    def test_iter_errors_reports_every_violation(self, contract, valid_fee_record):
        valid_fee_record["inbound_fee_rate"] = 10_001
        valid_fee_record["outbound_base_fee"] = -1

        assert self.violations(contract, valid_fee_record) == [
            ("maximum", ["inbound_fee_rate"]),
            ("minimum", ["outbound_base_fee"]),
        ]
