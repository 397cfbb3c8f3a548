"""
Contract Validation Module

JSON Schema contracts for operator-supplied registration input.
"""

from .validators import ContractValidator, FeeParametersValidator, SchemaLoader

__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "FeeParametersValidator",
]
