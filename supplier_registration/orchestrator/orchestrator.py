"""Submission orchestrator: runs one supplier registration end to end.

validate -> convert/assemble -> preview -> confirm -> submit

The orchestrator is the only component touching external collaborators.
Validation failures, conversion failures and an operator decline all end the
run before the transport is reached; a confirmed run submits exactly once and
never retries. Key errors at any step and any exception raised by the
transport end the run FAILED.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from supplier_registration.assembly.assembler import (
    RegistrationParameterAssembler,
    build_contract_call,
)
from supplier_registration.config import RegistrationConfig
from supplier_registration.core.domain.registration import ContractCall, RegistrationParameters
from supplier_registration.core.domain.units import ConversionError, sats_to_btc
from supplier_registration.core.domain.wallet import WalletBalances
from supplier_registration.orchestrator.collaborators import (
    BalanceProvider,
    Display,
    InputCollector,
    KeyConfigurationError,
    KeyProvider,
    SubmissionContext,
    Transport,
    TransportFailure,
)
from supplier_registration.orchestrator.state_machine import (
    RegistrationState,
    RegistrationStateMachine,
    RegistrationTransition,
)
from supplier_registration.preview.formatter import TransactionPreviewFormatter
from supplier_registration.validation.fee_parameters import (
    FeeParameterValidator,
    InvalidFeeParameter,
)


logger = logging.getLogger(__name__)

_KEYS_NOT_CONFIGURED = "Unable to register supplier - environment not configured: {}"


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of one registration run."""

    state: RegistrationState
    transitions: Tuple[RegistrationTransition, ...]
    message: str

    parameters: Optional[RegistrationParameters] = None
    contract_call: Optional[ContractCall] = None
    preview: Optional[str] = None
    tx_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == RegistrationState.SUCCEEDED

    @property
    def reason(self) -> str:
        return self.transitions[-1].transition_reason if self.transitions else ""


class SubmissionOrchestrator:
    """Sequences a supplier registration against its collaborators.

    All settings come from the RegistrationConfig given at construction;
    nothing is read from process-wide state.
    """

    def __init__(
        self,
        config: RegistrationConfig,
        inputs: InputCollector,
        balances: BalanceProvider,
        keys: KeyProvider,
        display: Display,
        transport: Transport,
        validator: FeeParameterValidator | None = None,
        assembler: RegistrationParameterAssembler | None = None,
        formatter: TransactionPreviewFormatter | None = None,
    ):
        self.config = config
        self._inputs = inputs
        self._balances = balances
        self._keys = keys
        self._display = display
        self._transport = transport
        self.validator = validator or FeeParameterValidator()
        self.assembler = assembler or RegistrationParameterAssembler()
        self.formatter = formatter or TransactionPreviewFormatter()

    def run(self) -> RegistrationOutcome:
        """Run one registration to a terminal state.

        Returns:
            RegistrationOutcome (SUCCEEDED, ABORTED or FAILED)
        """
        machine = RegistrationStateMachine()

        # 1. Keys must be configured before anything is asked
        try:
            self._keys.validate()
        except KeyConfigurationError as e:
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="keys_not_configured",
                message=_KEYS_NOT_CONFIGURED.format(e),
            )

        # 2. Account context and operator answers
        addresses = self._keys.addresses()
        balances = self._balances.get_balances()
        self._display.show(self.formatter.render_account_summary(addresses, balances))
        raw = self._inputs.collect(balances, self.config.prompt_defaults)

        # 3. Fee validation
        machine.transition(RegistrationState.VALIDATING, "input_received")
        try:
            fees = self.validator.validate(raw)
        except InvalidFeeParameter as e:
            return self._finish(
                machine,
                RegistrationState.ABORTED,
                reason="invalid_fee_parameter",
                message=f"Invalid fee parameters: {e}",
            )

        # 4. Conversion and assembly
        machine.transition(RegistrationState.CONVERTING, "fees_valid")
        try:
            parameters = self.assembler.assemble(
                fees,
                raw.liquidity_amount,
                raw.network_fee_budget,
                self._keys.public_key(),
            )
            contract_call = build_contract_call(parameters, self.config)
        except ConversionError as e:
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="conversion_error",
                message=f"Invalid amount: {e}",
            )
        except KeyConfigurationError as e:
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="keys_not_configured",
                message=_KEYS_NOT_CONFIGURED.format(e),
            )
        self._check_liquidity(parameters, balances)

        # 5. Preview and confirmation
        preview = self.formatter.render(parameters)
        machine.transition(
            RegistrationState.PREVIEWING_AWAITING_CONFIRMATION,
            "assembled",
            details=self.formatter.render_contract_call(contract_call),
        )
        self._display.show(preview)
        self._display.show(self.formatter.render_contract_call(contract_call))

        if not self._inputs.confirm(preview):
            return self._finish(
                machine,
                RegistrationState.ABORTED,
                reason="user_declined",
                message="Registration cancelled, nothing was submitted",
                parameters=parameters,
                contract_call=contract_call,
                preview=preview,
            )

        # 6. Submission (exactly once)
        machine.transition(RegistrationState.SUBMITTING, "operator_confirmed")
        submitted = dict(parameters=parameters, contract_call=contract_call, preview=preview)
        try:
            context = SubmissionContext(
                network=self.config.network,
                sender_key=self._keys.sender_key(),
                contract_call=contract_call,
            )
        except KeyConfigurationError as e:
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="keys_not_configured",
                message=_KEYS_NOT_CONFIGURED.format(e),
                **submitted,
            )

        try:
            tx_id = self._transport.submit(parameters, context)
        except TransportFailure as e:
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="transport_failure",
                message=f"Transaction failed: {e}",
                level=logging.ERROR,
                **submitted,
            )
        except Exception as e:
            # Broadcast outcome unknown; surfaced once, never retried
            return self._finish(
                machine,
                RegistrationState.FAILED,
                reason="transport_error",
                message=f"Transaction failed, broadcast outcome unknown: {e!r}",
                level=logging.ERROR,
                exc_info=True,
                **submitted,
            )

        return self._finish(
            machine,
            RegistrationState.SUCCEEDED,
            reason="broadcast_accepted",
            message=f"TXID: {tx_id}",
            tx_id=tx_id,
            **submitted,
        )

    def _check_liquidity(self, parameters: RegistrationParameters, balances: WalletBalances) -> None:
        # Caller precondition, reported but not enforced
        liquidity = sats_to_btc(parameters.liquidity_amount_base_units)
        if liquidity == 0:
            logger.warning("Liquidity amount truncates to 0 xBTC")
        elif liquidity > balances.xbtc:
            logger.warning(
                "Liquidity %s xBTC exceeds current balance %s xBTC", liquidity, balances.xbtc
            )

    def _finish(
        self,
        machine: RegistrationStateMachine,
        state: RegistrationState,
        *,
        reason: str,
        message: str,
        level: int = logging.WARNING,
        exc_info: bool = False,
        **fields,
    ) -> RegistrationOutcome:
        machine.transition(state, reason, details=message)
        if state != RegistrationState.SUCCEEDED:
            logger.log(level, "Registration ended %s: %s", state.value, message, exc_info=exc_info)
        self._display.show(message)
        return RegistrationOutcome(
            state=state,
            transitions=machine.history,
            message=message,
            **fields,
        )
