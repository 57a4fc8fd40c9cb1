# hfsm/core/configuration.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Construction API for state machine topologies.

A StateMachineConfig owns the StateGraph of every configured state and is
reusable across any number of StateMachine instances. StateConfiguration is
the fluent builder returned by `configure(state)`.

Example::

    config = StateMachineConfig()
    config.configure("Idle").substate_of("Active").permit("Start", "Running")
    config.configure("Running").substate_of("Active").permit("Pause", "Idle")
    config.configure("Active").permit("Stop", "Shutdown")
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, List, Optional, TextIO

from hfsm.core.behaviours import (
    Action,
    DynamicTriggerBehaviour,
    Guard,
    InternalTriggerBehaviour,
    Selector,
    TransitioningTriggerBehaviour,
    always,
    no_action,
)
from hfsm.core.errors import ConfigurationError, IdentityTransitionError
from hfsm.core.states import ANY_TRIGGER, StateRepresentation, TransitionAction
from hfsm.core.transitions import Transition
from hfsm.runtime import export
from hfsm.runtime.graph import StateGraph


def _require(value: Any, name: str) -> None:
    if value is None:
        raise ConfigurationError(f"{name} must not be None")


def _accepts_transition(action: Callable[..., None]) -> bool:
    """True if `action` can be called as action(transition, context)."""
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); assume the full form.
        return True
    positional = 0
    for param in params:
        if param.kind == param.VAR_POSITIONAL:
            return True
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2


def _as_transition_action(action: Callable[..., None]) -> TransitionAction:
    """Adapt a context-only callable to the (transition, context) form."""
    if _accepts_transition(action):
        return action

    def context_only(transition: Transition, context: Any) -> None:
        action(context)

    return context_only


class StateConfiguration:
    """
    Fluent configuration of one state. Every method returns the receiver so
    calls can be chained.
    """

    def __init__(self, representation: StateRepresentation, config: "StateMachineConfig") -> None:
        self._representation = representation
        self._config = config

    @property
    def state(self) -> Any:
        return self._representation.state

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def permit(self, trigger: Any, destination: Any, action: Action = no_action) -> "StateConfiguration":
        """
        Accept the trigger and transition to the destination state.

        :param trigger: The accepted trigger.
        :param destination: The state the trigger leads to. Must differ from
            the configured state.
        :param action: Called with the context after exit actions and before
            the state changes.
        :raises IdentityTransitionError: If destination is the configured state.
        """
        return self.permit_if(trigger, destination, always, action)

    def permit_if(
        self, trigger: Any, destination: Any, guard: Guard, action: Action = no_action
    ) -> "StateConfiguration":
        """
        Accept the trigger and transition to the destination state, only while
        the guard holds for the machine's context.
        """
        self._config.register_transition(self.state, trigger, destination, guard, action)
        return self

    def permit_if_else_ignore(
        self, trigger: Any, destination: Any, guard: Guard, action: Action = no_action
    ) -> "StateConfiguration":
        """
        Like permit_if, but when the guard does not hold the trigger is
        ignored instead of being reported as unhandled.
        """
        _require(guard, "guard")
        self.permit_if(trigger, destination, guard, action)
        return self.ignore_if(trigger, lambda context: not guard(context))

    def permit_internal(self, trigger: Any, action: Action) -> "StateConfiguration":
        """Run the action on trigger without leaving the state or running entry/exit actions."""
        return self.permit_internal_if(trigger, always, action)

    def permit_internal_if(self, trigger: Any, guard: Guard, action: Action) -> "StateConfiguration":
        self._config.register_internal(self.state, trigger, guard, action)
        return self

    def permit_reentry(self, trigger: Any, action: Action = no_action) -> "StateConfiguration":
        """
        Accept the trigger, exit the state and enter it again. Only the
        state's own exit and entry actions run, never its superstates'.
        """
        return self.permit_reentry_if(trigger, always, action)

    def permit_reentry_if(self, trigger: Any, guard: Guard, action: Action = no_action) -> "StateConfiguration":
        self._config.register_reentry(self.state, trigger, guard, action)
        return self

    def permit_dynamic(self, trigger: Any, selector: Selector, action: Action = no_action) -> "StateConfiguration":
        """
        Accept the trigger and transition to a state computed at fire time.

        :param selector: Called with the context; returns the destination.
        """
        return self.permit_dynamic_if(trigger, selector, always, action)

    def permit_dynamic_if(
        self, trigger: Any, selector: Selector, guard: Guard, action: Action = no_action
    ) -> "StateConfiguration":
        self._config.register_dynamic(self.state, trigger, selector, guard, action)
        return self

    def ignore(self, trigger: Any) -> "StateConfiguration":
        """Accept the trigger and do nothing."""
        return self.ignore_if(trigger, always)

    def ignore_if(self, trigger: Any, guard: Guard) -> "StateConfiguration":
        self._config.register_internal(self.state, trigger, guard, no_action)
        return self

    # ------------------------------------------------------------------
    # Entry / exit actions
    # ------------------------------------------------------------------

    def on_entry(self, action: Callable[..., None]) -> "StateConfiguration":
        """
        Run an action whenever the state is entered.

        :param action: Either ``action(context)`` or
            ``action(transition, context)``.
        """
        self._config.add_entry_action(self.state, action)
        return self

    def on_entry_from(self, trigger: Any, action: Callable[..., None]) -> "StateConfiguration":
        """Run an action when the state is entered through the given trigger."""
        self._config.add_entry_action(self.state, action, trigger=trigger)
        return self

    def on_exit(self, action: Callable[..., None]) -> "StateConfiguration":
        """
        Run an action whenever the state is exited.

        :param action: Either ``action(context)`` or
            ``action(transition, context)``.
        """
        self._config.add_exit_action(self.state, action)
        return self

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    def substate_of(self, superstate: Any) -> "StateConfiguration":
        """
        Nest the configured state within a superstate.

        Substates inherit the triggers of their superstate. Entering the
        substate from outside the superstate runs the superstate's entry
        actions first; leaving it to outside runs the superstate's exit
        actions last.
        """
        self._config.set_superstate(self.state, superstate)
        return self


class StateMachineConfig:
    """
    The reusable topology of a state machine: every configured state with its
    behaviours, actions and superstate. Firing never mutates it, so a single
    configuration may back many machines.
    """

    def __init__(self) -> None:
        self._graph = StateGraph()

    @property
    def graph(self) -> StateGraph:
        return self._graph

    def configure(self, state: Any) -> StateConfiguration:
        """Begin configuration of a state, creating its representation if needed."""
        return StateConfiguration(self._graph.get_or_create_representation(state), self)

    def get_representation(self, state: Any) -> Optional[StateRepresentation]:
        """Return the representation of a state, or None if it was never configured."""
        return self._graph.get_representation(state)

    def get_states(self) -> List[Any]:
        return self._graph.get_all_states()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_transition(
        self, state: Any, trigger: Any, destination: Any, guard: Guard = always, action: Action = no_action
    ) -> None:
        """
        Register a fixed-destination transition.

        :raises IdentityTransitionError: If destination equals `state`; use
            register_reentry or register_internal instead.
        """
        if destination == state:
            raise IdentityTransitionError(state)
        self._add_transitioning(state, trigger, destination, guard, action)

    def register_reentry(self, state: Any, trigger: Any, guard: Guard = always, action: Action = no_action) -> None:
        """Register a transition that exits `state` and enters it again."""
        self._add_transitioning(state, trigger, state, guard, action)

    def _add_transitioning(self, state: Any, trigger: Any, destination: Any, guard: Guard, action: Action) -> None:
        _require(guard, "guard")
        _require(action, "action")
        self._graph.get_or_create_representation(state).add_trigger_behaviour(
            TransitioningTriggerBehaviour(trigger=trigger, guard=guard, action=action, destination=destination)
        )

    def register_internal(self, state: Any, trigger: Any, guard: Guard = always, action: Action = no_action) -> None:
        _require(guard, "guard")
        _require(action, "action")
        self._graph.get_or_create_representation(state).add_trigger_behaviour(
            InternalTriggerBehaviour(trigger=trigger, guard=guard, action=action)
        )

    def register_dynamic(
        self, state: Any, trigger: Any, selector: Selector, guard: Guard = always, action: Action = no_action
    ) -> None:
        _require(selector, "selector")
        _require(guard, "guard")
        _require(action, "action")
        self._graph.get_or_create_representation(state).add_trigger_behaviour(
            DynamicTriggerBehaviour(trigger=trigger, guard=guard, action=action, selector=selector)
        )

    def add_entry_action(self, state: Any, action: Callable[..., None], trigger: Any = ANY_TRIGGER) -> None:
        _require(action, "action")
        self._graph.get_or_create_representation(state).add_entry_action(_as_transition_action(action), trigger)

    def add_exit_action(self, state: Any, action: Callable[..., None]) -> None:
        _require(action, "action")
        self._graph.get_or_create_representation(state).add_exit_action(_as_transition_action(action))

    def set_superstate(self, state: Any, superstate: Any) -> None:
        self._graph.set_superstate(state, superstate)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_edge_list(self, print_labels: bool = True) -> List[str]:
        """Edges of every fixed-destination transition as ``source -> destination [trigger]``."""
        return export.to_edge_list(self._graph, print_labels)

    def generate_dot_file_into(self, stream: TextIO, print_labels: bool = False) -> None:
        export.write_dot(self._graph, stream, print_labels)
