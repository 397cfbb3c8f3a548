"""
Wallet: supplier addresses and holdings as shown to the operator

Balances are display-only: they help the operator size the commitment and
are never enforced by the registration core.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class SupplierAddresses(BaseModel):
    """Addresses the supplier registers and funds from."""

    stx_address: str = Field(..., min_length=1, description="Stacks address (tx sender)")
    btc_address: str = Field(..., min_length=1, description="BTC address for the public key")

    model_config = {"frozen": True}


class WalletBalances(BaseModel):
    """Current holdings in display units."""

    stx: Decimal = Field(..., ge=0, description="STX balance")
    xbtc: Decimal = Field(..., ge=0, description="xBTC balance")
    btc: Decimal = Field(..., ge=0, description="BTC balance")

    model_config = {"frozen": True}
