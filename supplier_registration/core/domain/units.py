"""
Units: Centralised unit conversion for supplier registration

The only permitted way to move between:
- basis points <-> percent (fee rates)
- BTC / xBTC <-> satoshis (base fees, committed liquidity)
- STX <-> micro-STX (network fee)

All amounts are decimal.Decimal. Binary floats never take part in arithmetic:
a float coming from an input form is read through its shortest str() form.
"""

import re
from decimal import ROUND_DOWN, Decimal, DecimalException, InvalidOperation, localcontext
from typing import Final, Union


# =============================================================================
# SCALE FACTORS
# =============================================================================

# Fractional digits of one BTC / xBTC
BTC_DECIMALS: Final[int] = 8

# Satoshis per BTC (1e8)
SATS_PER_BTC: Final[int] = 10**BTC_DECIMALS

# Fractional digits of one STX
STX_DECIMALS: Final[int] = 6

# Micro-STX per STX (1e6)
USTX_PER_STX: Final[int] = 10**STX_DECIMALS

# Basis points per whole unit (1e4 = 100%)
BPS_PER_UNIT: Final[int] = 10**4

# Basis points per percent
BPS_PER_PERCENT: Final[int] = BPS_PER_UNIT // 100

# Fee rate ceiling: 100%
FEE_RATE_MAX_BPS: Final[int] = BPS_PER_UNIT

# Compressed secp256k1 public key, the bridge's (buff 33) argument
PUBLIC_KEY_LENGTH: Final[int] = 33


DecimalInput = Union[str, int, float, Decimal]

# Plain ASCII decimal notation (optional sign, fraction, exponent)
_DECIMAL_TEXT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class ConversionError(ValueError):
    """
    Operator input could not be converted to on-chain units.

    Attributes:
        field: Name of the offending input (may be empty)
        value: The raw value as received
    """

    def __init__(self, message: str, *, field: str = "", value: object = None):
        super().__init__(message)
        self.field = field
        self.value = value


# =============================================================================
# PARSING / NORMALISATION
# =============================================================================


def parse_decimal(value: DecimalInput, field: str = "amount") -> Decimal:
    """
    Parse operator input into a finite Decimal.

    Args:
        value: str, int, float or Decimal as entered
        field: Input name used in error messages

    Returns:
        Finite Decimal

    Raises:
        ConversionError: bool, None, non-numeric text, NaN or infinity

    Text must be plain ASCII decimal notation: digit group separators
    ("1_000") and non-ASCII digits are rejected.
    """
    if isinstance(value, bool) or value is None:
        raise ConversionError(
            f"{field}: expected a decimal number, got {value!r}", field=field, value=value
        )

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not _DECIMAL_TEXT.fullmatch(text):
            raise ConversionError(
                f"{field}: {value!r} is not a well-formed decimal number",
                field=field,
                value=value,
            )
        parsed = Decimal(text)
    else:
        raise ConversionError(
            f"{field}: unsupported type {type(value).__name__}", field=field, value=value
        )

    if not parsed.is_finite():
        raise ConversionError(f"{field}: {value!r} is not a finite number", field=field, value=value)

    return parsed


def truncate_decimal_places(amount: Decimal, places: int) -> Decimal:
    """
    Cut an amount down to `places` fractional digits (toward zero, never up).

    Args:
        amount: Finite Decimal
        places: Fractional digits to keep

    Returns:
        Decimal with exponent exactly -places

    Raises:
        ConversionError: Amount too large to quantise
    """
    try:
        return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)
    except InvalidOperation:
        raise ConversionError(
            f"amount {amount} cannot be represented with {places} decimal places", value=amount
        ) from None


def _scale(amount: Decimal, places: int, field: str, value: object) -> Decimal:
    # Precision follows the coefficient so scaleb never rounds
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits))
        ctx.traps[InvalidOperation] = True
        try:
            return amount.scaleb(places)
        except DecimalException:
            raise ConversionError(
                f"{field}: {value!r} is out of range", field=field, value=value
            ) from None


def _require_non_negative(amount: Decimal, field: str, value: object) -> None:
    if amount < 0:
        raise ConversionError(f"{field}: amount cannot be negative: {value!r}", field=field, value=value)


# =============================================================================
# FEE RATES
# =============================================================================


def bps_to_percent(bps: int) -> Decimal:
    """
    Basis points -> percent.

    No bounds are enforced here, range checks belong to the fee validator.

    Args:
        bps: Basis points (10 bps = 0.1%)

    Returns:
        Percent as Decimal (10 -> Decimal('0.1'))
    """
    return Decimal(bps) / Decimal(BPS_PER_PERCENT)


# =============================================================================
# BTC <-> SATS
# =============================================================================


def btc_to_sats(amount: DecimalInput, field: str = "amount") -> int:
    """
    BTC (or xBTC) -> satoshis.

    Args:
        amount: Non-negative amount with at most 8 fractional digits
        field: Input name used in error messages

    Returns:
        Integer satoshis

    Raises:
        ConversionError: Malformed, negative, out of range, or finer than one satoshi
    """
    btc = parse_decimal(amount, field)
    _require_non_negative(btc, field, amount)

    sats = _scale(btc, BTC_DECIMALS, field, amount)
    if sats != sats.to_integral_value(rounding=ROUND_DOWN):
        raise ConversionError(
            f"{field}: {amount!r} has more than {BTC_DECIMALS} decimal places",
            field=field,
            value=amount,
        )
    return int(sats)


def sats_to_btc(sats: int) -> Decimal:
    """
    Satoshis -> BTC, exact (no rounding), carrying 8 fractional digits.

    Args:
        sats: Integer satoshis

    Returns:
        Decimal BTC (500 -> Decimal('0.00000500'))
    """
    return _scale(Decimal(sats), -BTC_DECIMALS, "sats", sats)


# =============================================================================
# STX <-> MICRO-STX
# =============================================================================


def stx_to_ustx(amount: DecimalInput, field: str = "amount") -> int:
    """
    STX -> micro-STX, truncating anything finer than one micro-STX.

    Args:
        amount: Non-negative STX amount
        field: Input name used in error messages

    Returns:
        Integer micro-STX

    Raises:
        ConversionError: Malformed, negative or out-of-range input
    """
    stx = parse_decimal(amount, field)
    _require_non_negative(stx, field, amount)
    ustx = _scale(stx, STX_DECIMALS, field, amount)
    return int(ustx.to_integral_value(rounding=ROUND_DOWN))


def ustx_to_stx(ustx: int) -> Decimal:
    """Micro-STX -> STX, exact."""
    return _scale(Decimal(ustx), -STX_DECIMALS, "ustx", ustx)


# =============================================================================
# DISPLAY
# =============================================================================


def format_decimal(value: Decimal, grouping: bool = False) -> str:
    """
    Plain (never scientific) rendering with trailing zeros stripped.

    Decimal('0.00000500') -> '0.000005', Decimal('1E+2') -> '100'.

    Args:
        value: Decimal to render
        grouping: Insert thousands separators

    Returns:
        Display string
    """
    if value == 0:
        return "0"
    return format(value.normalize(), ",f" if grouping else "f")
