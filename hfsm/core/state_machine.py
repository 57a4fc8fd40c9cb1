# hfsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Any, Callable, List, Optional, Set

from hfsm.core.configuration import StateConfiguration, StateMachineConfig
from hfsm.core.errors import AlreadyStartedError, ConfigurationError, UnhandledTriggerError
from hfsm.core.hooks import HookManager
from hfsm.core.states import StateRepresentation
from hfsm.core.transitions import Transition

logger = logging.getLogger(__name__)

UnhandledTriggerHandler = Callable[[Any, Any], None]


class StateReference:
    """In-memory cell holding the current state of a machine."""

    def __init__(self, state: Any = None) -> None:
        self.state = state

    def get(self) -> Any:
        return self.state

    def set(self, state: Any) -> None:
        self.state = state


def _raise_unhandled(state: Any, trigger: Any) -> None:
    raise UnhandledTriggerError(state, trigger)


class StateMachine:
    """
    Runs a hierarchical state machine over a StateMachineConfig.

    The machine owns only its current state value, its context and whether it
    has started; the configuration is shared and never mutated by firing.
    Calls are synchronous and must not overlap on one instance.
    """

    def __init__(
        self,
        initial_state: Any,
        context: Any = None,
        config: Optional[StateMachineConfig] = None,
        *,
        state_accessor: Optional[Callable[[], Any]] = None,
        state_mutator: Optional[Callable[[Any], None]] = None,
        hooks: Optional[List[Any]] = None,
    ) -> None:
        """
        :param initial_state: The state in which this machine begins.
        :param context: Arbitrary value passed to every guard, action and selector.
        :param config: Topology to run. A new, empty configuration is created if omitted.
        :param state_accessor: Reads the authoritative current state from external storage.
        :param state_mutator: Writes the authoritative current state to external storage.
            Called once with `initial_state` during construction.
        :param hooks: Optional hook objects implementing on_trigger and/or on_transition.
        :raises ConfigurationError: If only one of accessor and mutator is given.
        """
        if (state_accessor is None) != (state_mutator is None):
            raise ConfigurationError("state_accessor and state_mutator must be given together")

        self._config = config if config is not None else StateMachineConfig()
        self._context = context
        self._initial_state = initial_state
        self._started = False
        self._hooks = HookManager(hooks)
        self._unhandled_trigger_handler: UnhandledTriggerHandler = _raise_unhandled

        if state_accessor is None:
            reference = StateReference()
            state_accessor, state_mutator = reference.get, reference.set
        self._state_accessor = state_accessor
        self._state_mutator = state_mutator
        self._state_mutator(initial_state)

    def __repr__(self) -> str:
        triggers = ", ".join(sorted(str(t) for t in self.permitted_triggers))
        return f"StateMachine(state={self.state!r}, permitted_triggers=[{triggers}])"

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> Any:
        """The current state."""
        return self._state_accessor()

    @property
    def context(self) -> Any:
        return self._context

    @property
    def configuration(self) -> StateMachineConfig:
        return self._config

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def permitted_triggers(self) -> Set[Any]:
        """Triggers that can currently be fired, including inherited ones."""
        return self._current_representation().permitted_triggers(self._context)

    def get_state(self) -> Any:
        return self.state

    def get_permitted_triggers(self) -> Set[Any]:
        return self.permitted_triggers

    def configure(self, state: Any) -> StateConfiguration:
        """Shortcut for configuring a state on this machine's configuration."""
        return self._config.configure(state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_in_state(self, state: Any) -> bool:
        """True if the current state is `state` or one of its substates."""
        return self._current_representation().is_included_in(state)

    def can_fire(self, trigger: Any) -> bool:
        return self._current_representation().can_handle(trigger, self._context)

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------

    def fire_initial_transition(self) -> None:
        """
        Enter the initial state and all of its superstates, outermost first.

        May be called only once, before any trigger is fired.

        :raises AlreadyStartedError: If the machine has already started or has
            left its initial state.
        """
        current = self.state
        if self._started or current != self._initial_state:
            raise AlreadyStartedError("Firing initial transition after state machine has been started")

        self._started = True
        logger.debug("Firing initial transition into %r", current)
        self._current_representation().enter(Transition(None, current, None), self._context)

    def fire(self, trigger: Any) -> None:
        """
        Fire a trigger from the current state.

        Exit actions run first, then the transition's action, then the state
        is changed, then entry actions run. Exceptions raised by guards or
        actions propagate unchanged and are not rolled back.

        :param trigger: The trigger to fire.
        """
        self._started = True
        self._hooks.execute_on_trigger(trigger)

        representation = self._current_representation()
        behaviour = representation.try_find_handler(trigger, self._context)
        if behaviour is None:
            logger.debug("No handler for trigger %r in state %r", trigger, representation.state)
            self._unhandled_trigger_handler(representation.state, trigger)
            return

        if behaviour.is_internal:
            logger.debug("Internal transition on %r in state %r", trigger, representation.state)
            behaviour.perform_action(self._context)
            return

        source = self.state
        destination = behaviour.transitions_to(source, self._context)
        transition = Transition(source, destination, trigger)
        logger.debug("Transition %r -> %r on %r", source, destination, trigger)

        representation.exit(transition, self._context)
        behaviour.perform_action(self._context)
        self._state_mutator(destination)
        self._current_representation().enter(transition, self._context)

        self._hooks.execute_on_transition(trigger, source, destination)

    def on_unhandled_trigger(self, handler: UnhandledTriggerHandler) -> None:
        """
        Replace the default policy of raising UnhandledTriggerError.

        :param handler: Called with (state, trigger) when no behaviour resolves.
        """
        if handler is None:
            raise ConfigurationError("handler must not be None")
        self._unhandled_trigger_handler = handler

    def add_hook(self, hook: Any) -> None:
        self._hooks.register_hook(hook)

    def _current_representation(self) -> StateRepresentation:
        state = self.state
        representation = self._config.get_representation(state)
        if representation is None:
            # Unconfigured states behave as roots with no behaviours.
            return StateRepresentation(state)
        return representation
