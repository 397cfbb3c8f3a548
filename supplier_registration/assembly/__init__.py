"""Assembly: RegistrationParameters and the register-supplier call."""

from .assembler import (
    RegistrationParameterAssembler,
    build_contract_call,
    normalize_liquidity_amount,
)

__all__ = [
    "RegistrationParameterAssembler",
    "build_contract_call",
    "normalize_liquidity_amount",
]
