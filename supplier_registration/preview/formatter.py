"""Transaction preview

Human-readable summaries shown to the operator before confirmation. Every
display value is derived from the assembled RegistrationParameters through
the same unit conversions used for assembly, so what the operator confirms
is what gets submitted.
"""

from typing import List

from supplier_registration.core.domain.registration import ContractCall, RegistrationParameters
from supplier_registration.core.domain.units import (
    bps_to_percent,
    format_decimal,
    sats_to_btc,
    ustx_to_stx,
)
from supplier_registration.core.domain.wallet import SupplierAddresses, WalletBalances


class TransactionPreviewFormatter:
    """Renders registration data for operator confirmation."""

    def render(self, parameters: RegistrationParameters) -> str:
        """Multi-line preview of a registration.

        Args:
            parameters: Assembled registration

        Returns:
            One line per fee, base fee, liquidity and network fee
        """
        liquidity_sats = parameters.liquidity_amount_base_units
        fee_ustx = parameters.network_fee_base_units

        lines: List[str] = [
            self.fee_rate_line("Inbound fee", parameters.inbound_fee_rate),
            self.base_fee_line("Inbound base fee", parameters.inbound_base_fee),
            self.fee_rate_line("Outbound fee", parameters.outbound_fee_rate),
            self.base_fee_line("Outbound base fee", parameters.outbound_base_fee),
            f"xBTC funds: {format_decimal(sats_to_btc(liquidity_sats), grouping=True)} xBTC "
            f"({liquidity_sats} sats)",
            f"Transaction fee: {format_decimal(ustx_to_stx(fee_ustx))} STX ({fee_ustx} uSTX)",
        ]
        return "\n".join(lines)

    @staticmethod
    def fee_rate_line(label: str, bps: int) -> str:
        return f"{label}: {bps} bips ({format_decimal(bps_to_percent(bps))}%)"

    @staticmethod
    def base_fee_line(label: str, sats: int) -> str:
        return f"{label}: {sats} sats ({format_decimal(sats_to_btc(sats))} BTC)"

    def render_account_summary(
        self, addresses: SupplierAddresses, balances: WalletBalances
    ) -> str:
        """Addresses and holdings shown before the operator sizes the commitment."""
        return "\n".join(
            [
                f"STX Address: {addresses.stx_address}",
                f"BTC Address: {addresses.btc_address}",
                f"STX Balance: {format_decimal(balances.stx, grouping=True)} STX",
                f"xBTC Balance: {format_decimal(balances.xbtc, grouping=True)} xBTC",
                f"BTC Balance: {format_decimal(balances.btc, grouping=True)} BTC",
            ]
        )

    def render_contract_call(self, call: ContractCall) -> str:
        # Arguments are listed by render()
        return (
            f"Contract call: {call.contract_id}::{call.function_name} "
            f"(fee {call.fee} uSTX, anchor {call.anchor_mode.value}, "
            f"post-conditions {call.post_condition_mode.value})"
        )
