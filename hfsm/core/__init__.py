"""
Core package providing the state machine engine.

Architecture:
- Transition records and trigger behaviours (leaf types)
- StateRepresentation: guard resolution, containment, entry/exit
- StateMachineConfig / StateConfiguration: topology construction
- StateMachine: the firing protocol
"""

# Import order matters to avoid circular dependencies
from .transitions import Transition
from .states import StateRepresentation
from .configuration import StateConfiguration, StateMachineConfig
from .state_machine import StateMachine

__all__ = [
    "Transition",
    "StateRepresentation",
    "StateConfiguration",
    "StateMachineConfig",
    "StateMachine",
]
