"""
Registration: supplier registration values

RawRegistrationInput is the fixed-shape record handed over by the input
collaborator, FeeParameters is its validated fee part, and
RegistrationParameters is the immutable bundle consumed by the transport.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from .units import FEE_RATE_MAX_BPS, PUBLIC_KEY_LENGTH


RawValue = Union[int, float, str, Decimal, None]


# =============================================================================
# OPERATOR INPUT
# =============================================================================


@dataclass(frozen=True)
class RawRegistrationInput:
    """Answers exactly as entered by the operator (nothing validated yet)."""

    inbound_fee_rate: RawValue
    inbound_base_fee: RawValue
    outbound_fee_rate: RawValue
    outbound_base_fee: RawValue
    liquidity_amount: RawValue
    network_fee_budget: RawValue

    def fee_record(self) -> Dict[str, Any]:
        """Fee fields as a dict for contract validation (None = not answered)."""
        record = {
            "inbound_fee_rate": self.inbound_fee_rate,
            "inbound_base_fee": self.inbound_base_fee,
            "outbound_fee_rate": self.outbound_fee_rate,
            "outbound_base_fee": self.outbound_base_fee,
        }
        return {key: value for key, value in record.items() if value is not None}


@dataclass(frozen=True)
class FeeParameters:
    """Validated fee inputs: rates in basis points, base fees in satoshis."""

    inbound_fee_rate: int
    inbound_base_fee: int
    outbound_fee_rate: int
    outbound_base_fee: int


# =============================================================================
# REGISTRATION PARAMETERS
# =============================================================================


class RegistrationParameters(BaseModel):
    """
    Ready-to-submit register-supplier bundle.

    Immutable (frozen=True): built once per attempt, rebuilt on retry.
    """

    inbound_fee_rate: int = Field(..., ge=0, le=FEE_RATE_MAX_BPS, description="Inbound fee (bps)")
    outbound_fee_rate: int = Field(..., ge=0, le=FEE_RATE_MAX_BPS, description="Outbound fee (bps)")
    inbound_base_fee: int = Field(..., ge=0, description="Inbound base fee (sats)")
    outbound_base_fee: int = Field(..., ge=0, description="Outbound base fee (sats)")
    liquidity_amount_base_units: int = Field(..., ge=0, description="Committed xBTC (sats)")
    public_key_bytes: bytes = Field(
        ...,
        min_length=PUBLIC_KEY_LENGTH,
        max_length=PUBLIC_KEY_LENGTH,
        description="Supplier BTC public key (compressed)",
    )
    network_fee_base_units: int = Field(..., ge=0, description="Transaction fee (uSTX)")

    model_config = {"frozen": True, "strict": True, "ser_json_bytes": "base64"}


# =============================================================================
# CONTRACT CALL
# =============================================================================


class AnchorMode(str, Enum):
    """Placement of the transaction relative to Bitcoin anchor blocks"""

    ANY = "any"
    ON_CHAIN_ONLY = "on_chain_only"
    OFF_CHAIN_ONLY = "off_chain_only"


class PostConditionMode(str, Enum):
    """Post-condition mode of the contract call"""

    ALLOW = "allow"
    DENY = "deny"


class ContractCall(BaseModel):
    """
    register-supplier call exactly as the transport should sign it.

    function_args keeps the bridge contract's positional order.
    """

    contract_address: str = Field(..., min_length=1, description="Bridge deployer address")
    contract_name: str = Field(..., min_length=1, description="Bridge contract name")
    function_name: str = Field(..., min_length=1, description="Public function")
    function_args: Tuple[Union[bytes, int], ...] = Field(..., description="Positional arguments")
    fee: int = Field(..., ge=0, description="Transaction fee (uSTX)")
    anchor_mode: AnchorMode = Field(AnchorMode.ANY, description="Anchor mode")
    post_condition_mode: PostConditionMode = Field(
        PostConditionMode.ALLOW, description="Post-condition mode"
    )

    model_config = {"frozen": True, "ser_json_bytes": "base64"}

    @field_validator("function_args")
    @classmethod
    def validate_function_args(cls, v: tuple) -> tuple:
        """Clarity arguments here are buffers or unsigned integers"""
        for position, arg in enumerate(v):
            if isinstance(arg, int) and arg < 0:
                raise ValueError(f"function_args[{position}] must be unsigned, got {arg}")
        return v

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"
