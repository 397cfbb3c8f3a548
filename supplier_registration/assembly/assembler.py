"""Registration parameter assembly

Turns validated fees plus the operator's amounts into RegistrationParameters,
and RegistrationParameters into the register-supplier contract call.

Liquidity is truncated to 8 decimal places (never rounded up), so the
committed amount is never more than the operator typed. Assembly is pure:
identical inputs give identical (equal) output.
"""

import logging
from decimal import Decimal
from typing import Union

from supplier_registration.config import RegistrationConfig
from supplier_registration.core.domain.registration import (
    ContractCall,
    FeeParameters,
    RegistrationParameters,
)
from supplier_registration.core.domain.units import (
    BTC_DECIMALS,
    PUBLIC_KEY_LENGTH,
    ConversionError,
    DecimalInput,
    btc_to_sats,
    parse_decimal,
    stx_to_ustx,
    truncate_decimal_places,
)


logger = logging.getLogger(__name__)


def normalize_liquidity_amount(amount: DecimalInput) -> Decimal:
    """
    Liquidity amount cut to xBTC granularity.

    0.123456789 -> 0.12345678 (truncation, never up).

    Args:
        amount: xBTC amount as entered

    Returns:
        Decimal with exactly 8 fractional digits

    Raises:
        ConversionError: Malformed or negative amount
    """
    xbtc = parse_decimal(amount, "liquidity_amount")
    if xbtc < 0:
        raise ConversionError(
            f"liquidity_amount: amount cannot be negative: {amount!r}",
            field="liquidity_amount",
            value=amount,
        )
    return truncate_decimal_places(xbtc, BTC_DECIMALS)


class RegistrationParameterAssembler:
    """Builds RegistrationParameters from validated input.

    Steps:
    1. Normalise liquidity to 8 decimals (truncate)
    2. Liquidity -> sats
    3. Network fee budget -> uSTX
    4. Fee rates / base fees passed through
    5. Bundle with the supplier public key
    """

    def assemble(
        self,
        fees: FeeParameters,
        liquidity_amount: DecimalInput,
        network_fee_budget: DecimalInput,
        public_key: Union[bytes, bytearray],
    ) -> RegistrationParameters:
        """Assemble the register-supplier bundle.

        Args:
            fees: Output of the fee validator
            liquidity_amount: Committed xBTC (display units)
            network_fee_budget: Transaction fee (STX)
            public_key: Compressed supplier public key

        Returns:
            RegistrationParameters

        Raises:
            ConversionError: Malformed amount or wrong-size public key
        """
        normalized = normalize_liquidity_amount(liquidity_amount)
        liquidity_sats = btc_to_sats(normalized, "liquidity_amount")
        network_fee_ustx = stx_to_ustx(network_fee_budget, "network_fee_budget")

        if not isinstance(public_key, (bytes, bytearray)):
            raise ConversionError(
                f"public_key: expected bytes, got {type(public_key).__name__}",
                field="public_key",
                value=public_key,
            )
        if len(public_key) != PUBLIC_KEY_LENGTH:
            raise ConversionError(
                f"public_key: expected {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}",
                field="public_key",
                value=public_key,
            )

        parameters = RegistrationParameters(
            inbound_fee_rate=fees.inbound_fee_rate,
            outbound_fee_rate=fees.outbound_fee_rate,
            inbound_base_fee=fees.inbound_base_fee,
            outbound_base_fee=fees.outbound_base_fee,
            liquidity_amount_base_units=liquidity_sats,
            public_key_bytes=bytes(public_key),
            network_fee_base_units=network_fee_ustx,
        )
        logger.debug(
            "Assembled registration: liquidity=%s sats fee=%s uSTX",
            liquidity_sats,
            network_fee_ustx,
        )
        return parameters


def build_contract_call(
    parameters: RegistrationParameters, config: RegistrationConfig
) -> ContractCall:
    """
    register-supplier call for the bridge contract.

    Argument order is fixed by the contract:
    (public-key, inbound-fee, outbound-fee, outbound-base-fee,
    inbound-base-fee, funds)

    Args:
        parameters: Assembled registration
        config: Bridge contract location and call modes

    Returns:
        ContractCall with the transaction fee attached
    """
    return ContractCall(
        contract_address=config.contract_address,
        contract_name=config.contract_name,
        function_name=config.function_name,
        function_args=(
            parameters.public_key_bytes,
            parameters.inbound_fee_rate,
            parameters.outbound_fee_rate,
            parameters.outbound_base_fee,
            parameters.inbound_base_fee,
            parameters.liquidity_amount_base_units,
        ),
        fee=parameters.network_fee_base_units,
        anchor_mode=config.anchor_mode,
        post_condition_mode=config.post_condition_mode,
    )
