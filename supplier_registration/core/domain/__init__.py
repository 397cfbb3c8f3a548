"""
Domain models and value objects.

Contains the unit conversions and the values that flow through a supplier
registration: raw operator input, validated fees, RegistrationParameters,
the contract call, and wallet context.
"""

from supplier_registration.core.domain.registration import (
    AnchorMode,
    ContractCall,
    FeeParameters,
    PostConditionMode,
    RawRegistrationInput,
    RegistrationParameters,
)
from supplier_registration.core.domain.units import (
    BPS_PER_PERCENT,
    BPS_PER_UNIT,
    BTC_DECIMALS,
    FEE_RATE_MAX_BPS,
    PUBLIC_KEY_LENGTH,
    SATS_PER_BTC,
    STX_DECIMALS,
    USTX_PER_STX,
    ConversionError,
    bps_to_percent,
    btc_to_sats,
    format_decimal,
    parse_decimal,
    sats_to_btc,
    stx_to_ustx,
    truncate_decimal_places,
    ustx_to_stx,
)
from supplier_registration.core.domain.wallet import SupplierAddresses, WalletBalances

__all__ = [
    # Units module
    "BTC_DECIMALS",
    "SATS_PER_BTC",
    "STX_DECIMALS",
    "USTX_PER_STX",
    "BPS_PER_UNIT",
    "BPS_PER_PERCENT",
    "FEE_RATE_MAX_BPS",
    "PUBLIC_KEY_LENGTH",
    "ConversionError",
    "parse_decimal",
    "truncate_decimal_places",
    "bps_to_percent",
    "btc_to_sats",
    "sats_to_btc",
    "stx_to_ustx",
    "ustx_to_stx",
    "format_decimal",
    # Registration models
    "RawRegistrationInput",
    "FeeParameters",
    "RegistrationParameters",
    "ContractCall",
    "AnchorMode",
    "PostConditionMode",
    # Wallet models
    "SupplierAddresses",
    "WalletBalances",
]
