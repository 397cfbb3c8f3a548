"""Registration state machine: lifecycle of one supplier registration run.

COLLECTING_INPUT -> VALIDATING -> CONVERTING -> PREVIEWING_AWAITING_CONFIRMATION
-> SUBMITTING -> {SUCCEEDED, ABORTED, FAILED}

- VALIDATING -> ABORTED on rejected fee terms
- CONVERTING -> FAILED on malformed amounts
- PREVIEWING_AWAITING_CONFIRMATION -> ABORTED when the operator declines
- COLLECTING_INPUT -> FAILED when signing keys are not configured
- SUBMITTING -> SUCCEEDED / FAILED per transport result
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple


logger = logging.getLogger(__name__)


class RegistrationState(str, Enum):
    """State of a registration run."""

    COLLECTING_INPUT = "COLLECTING_INPUT"
    VALIDATING = "VALIDATING"
    CONVERTING = "CONVERTING"
    PREVIEWING_AWAITING_CONFIRMATION = "PREVIEWING_AWAITING_CONFIRMATION"
    SUBMITTING = "SUBMITTING"
    SUCCEEDED = "SUCCEEDED"
    ABORTED = "ABORTED"
    FAILED = "FAILED"


TERMINAL_STATES: FrozenSet[RegistrationState] = frozenset(
    {RegistrationState.SUCCEEDED, RegistrationState.ABORTED, RegistrationState.FAILED}
)

ALLOWED_TRANSITIONS: Dict[RegistrationState, FrozenSet[RegistrationState]] = {
    RegistrationState.COLLECTING_INPUT: frozenset(
        {RegistrationState.VALIDATING, RegistrationState.FAILED}
    ),
    RegistrationState.VALIDATING: frozenset(
        {RegistrationState.CONVERTING, RegistrationState.ABORTED}
    ),
    RegistrationState.CONVERTING: frozenset(
        {RegistrationState.PREVIEWING_AWAITING_CONFIRMATION, RegistrationState.FAILED}
    ),
    RegistrationState.PREVIEWING_AWAITING_CONFIRMATION: frozenset(
        {RegistrationState.SUBMITTING, RegistrationState.ABORTED}
    ),
    RegistrationState.SUBMITTING: frozenset(
        {RegistrationState.SUCCEEDED, RegistrationState.FAILED}
    ),
    RegistrationState.SUCCEEDED: frozenset(),
    RegistrationState.ABORTED: frozenset(),
    RegistrationState.FAILED: frozenset(),
}


class IllegalTransition(RuntimeError):
    """Requested transition is not part of the lifecycle."""

    def __init__(self, current: RegistrationState, requested: RegistrationState):
        super().__init__(f"Illegal transition {current.value} → {requested.value}")
        self.current = current
        self.requested = requested


@dataclass(frozen=True)
class RegistrationTransition:
    """One recorded transition."""

    previous_state: RegistrationState
    new_state: RegistrationState
    transition_reason: str

    # For debugging
    details: str


class RegistrationStateMachine:
    """Tracks one run through the registration lifecycle.

    Starts in COLLECTING_INPUT; every transition is checked against
    ALLOWED_TRANSITIONS and recorded in order.
    """

    def __init__(self):
        self._state = RegistrationState.COLLECTING_INPUT
        self._history: List[RegistrationTransition] = []

    @property
    def state(self) -> RegistrationState:
        return self._state

    @property
    def history(self) -> Tuple[RegistrationTransition, ...]:
        return tuple(self._history)

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_transition(self, new_state: RegistrationState) -> bool:
        return new_state in ALLOWED_TRANSITIONS[self._state]

    def transition(
        self, new_state: RegistrationState, reason: str, details: str = ""
    ) -> RegistrationTransition:
        """Move to new_state.

        Args:
            new_state: Target state
            reason: Short machine-readable reason (e.g. 'user_declined')
            details: Human-readable context

        Returns:
            The recorded RegistrationTransition

        Raises:
            IllegalTransition: new_state is not reachable from the current state
        """
        if not self.can_transition(new_state):
            raise IllegalTransition(self._state, new_state)

        record = RegistrationTransition(
            previous_state=self._state,
            new_state=new_state,
            transition_reason=reason,
            details=details,
        )
        self._history.append(record)
        self._state = new_state
        logger.info(
            "Registration %s → %s (%s)", record.previous_state.value, new_state.value, reason
        )
        return record
