"""External collaborators of the registration workflow.

The orchestrator only talks to these interfaces; prompting, wallet lookups,
key storage and broadcasting are implemented by the host application.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from supplier_registration.config import PromptDefaults
from supplier_registration.core.domain.registration import (
    ContractCall,
    RawRegistrationInput,
    RegistrationParameters,
)
from supplier_registration.core.domain.wallet import SupplierAddresses, WalletBalances


# =============================================================================
# ERRORS
# =============================================================================


class TransportFailure(Exception):
    """Broadcast rejected or failed; reported to the operator verbatim, never retried."""

    def __init__(self, message: str, *, reason: str = ""):
        super().__init__(message)
        self.reason = reason


class KeyConfigurationError(Exception):
    """Signing keys or network settings are missing or inconsistent."""


# =============================================================================
# CONTEXT
# =============================================================================


@dataclass(frozen=True)
class SubmissionContext:
    """Everything the transport needs besides RegistrationParameters."""

    network: str
    sender_key: Any  # opaque signing material from the KeyProvider
    contract_call: ContractCall

    def __repr__(self) -> str:
        return (
            f"SubmissionContext(network={self.network!r}, sender_key=<redacted>, "
            f"contract_call={self.contract_call.contract_id}::{self.contract_call.function_name})"
        )


# =============================================================================
# INTERFACES
# =============================================================================


class InputCollector(Protocol):
    def collect(self, balances: WalletBalances, defaults: PromptDefaults) -> RawRegistrationInput:
        """Ask the operator for fee terms, liquidity and network fee.

        defaults carries the fee rate / base fee offered at the prompts.
        """
        ...

    def confirm(self, preview: str) -> bool:
        """Show the preview and ask for confirmation."""
        ...


class BalanceProvider(Protocol):
    def get_balances(self) -> WalletBalances:
        ...


class KeyProvider(Protocol):
    def validate(self) -> None:
        """Raise KeyConfigurationError if keys are not configured."""
        ...

    def addresses(self) -> SupplierAddresses:
        ...

    def public_key(self) -> bytes:
        ...

    def sender_key(self) -> Any:
        ...


class Display(Protocol):
    def show(self, text: str) -> None:
        ...


class Transport(Protocol):
    def submit(self, parameters: RegistrationParameters, context: SubmissionContext) -> str:
        """Broadcast once; return the transaction id or raise TransportFailure."""
        ...
