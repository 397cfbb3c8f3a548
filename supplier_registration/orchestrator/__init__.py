"""Orchestrator: registration lifecycle and its external collaborators."""

from .collaborators import (
    BalanceProvider,
    Display,
    InputCollector,
    KeyConfigurationError,
    KeyProvider,
    SubmissionContext,
    Transport,
    TransportFailure,
)
from .orchestrator import RegistrationOutcome, SubmissionOrchestrator
from .state_machine import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATES,
    IllegalTransition,
    RegistrationState,
    RegistrationStateMachine,
    RegistrationTransition,
)

__all__ = [
    "SubmissionOrchestrator",
    "RegistrationOutcome",
    "RegistrationState",
    "RegistrationStateMachine",
    "RegistrationTransition",
    "IllegalTransition",
    "ALLOWED_TRANSITIONS",
    "TERMINAL_STATES",
    "InputCollector",
    "BalanceProvider",
    "KeyProvider",
    "Display",
    "Transport",
    "SubmissionContext",
    "TransportFailure",
    "KeyConfigurationError",
]
