"""hfsm: a synchronous Hierarchical Finite State Machine (HFSM) engine

Given a fixed topology of states, triggers, guarded transitions and
entry/exit actions, a machine tracks its current state and evolves it one
fired trigger at a time, composing superstate and substate behaviour.

Responsibilities:
    - Topology construction through a fluent configuration API
    - Guarded trigger resolution with inheritance from superstates
    - Hierarchical entry/exit ordering
    - One-time initial transition into the starting state's hierarchy
    - Read-only export of the configured transitions

Cross-cutting Concerns:
    Thread Safety:
        - A configuration is read-only once built and may be shared
        - A machine is not synchronised; callers serialise fire() calls

    Error Handling:
        - All library errors derive from HFSMError
        - Guard and action exceptions propagate unchanged

    Logging:
        - Standard library logging under the "hfsm" logger namespace
        - DEBUG records only; no handlers are installed
"""

from .core.behaviours import (
    DynamicTriggerBehaviour,
    InternalTriggerBehaviour,
    TransitioningTriggerBehaviour,
    TriggerBehaviour,
)
from .core.configuration import StateConfiguration, StateMachineConfig
from .core.errors import (
    AlreadyStartedError,
    ConfigurationError,
    GuardAmbiguityError,
    HFSMError,
    IdentityTransitionError,
    UnhandledTriggerError,
)
from .core.hooks import HookManager, HookProtocol
from .core.state_machine import StateMachine, StateReference
from .core.states import StateRepresentation
from .core.transitions import Transition
from .runtime.graph import StateGraph

__version__ = "0.1.0"

__all__ = [
    "StateMachine",
    "StateMachineConfig",
    "StateConfiguration",
    "StateReference",
    "StateRepresentation",
    "StateGraph",
    "Transition",
    "TriggerBehaviour",
    "TransitioningTriggerBehaviour",
    "InternalTriggerBehaviour",
    "DynamicTriggerBehaviour",
    "HookManager",
    "HookProtocol",
    "HFSMError",
    "GuardAmbiguityError",
    "UnhandledTriggerError",
    "AlreadyStartedError",
    "ConfigurationError",
    "IdentityTransitionError",
]
