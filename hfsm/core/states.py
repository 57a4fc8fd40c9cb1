# hfsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set

from hfsm.core.behaviours import TriggerBehaviour
from hfsm.core.errors import GuardAmbiguityError
from hfsm.core.transitions import Transition

if TYPE_CHECKING:
    from hfsm.runtime.graph import StateGraph

TransitionAction = Callable[[Transition, Any], None]

# Entry actions registered without a trigger run for every entering transition.
ANY_TRIGGER = object()


class StateRepresentation:
    """
    Everything the engine knows about one state: the behaviours registered per
    trigger, and the ordered entry and exit actions.

    This class does NOT store parent or child references directly; the owning
    StateGraph keeps the hierarchy and `superstate` / `substates` resolve
    through it. A representation created without a graph is a root with no
    substates.
    """

    def __init__(self, state: Any, graph: Optional["StateGraph"] = None) -> None:
        """
        :param state: Identity of the represented state. Never changes.
        :param graph: The graph owning this representation, if any.
        """
        self._state = state
        self._graph = graph
        self._trigger_behaviours: Dict[Any, List[TriggerBehaviour]] = {}
        self._entry_actions: List[TransitionAction] = []
        self._exit_actions: List[TransitionAction] = []

    def __repr__(self) -> str:
        return f"StateRepresentation({self._state!r})"

    @property
    def state(self) -> Any:
        """The underlying state identity."""
        return self._state

    @property
    def trigger_behaviours(self) -> Dict[Any, List[TriggerBehaviour]]:
        return self._trigger_behaviours

    @property
    def entry_actions(self) -> List[TransitionAction]:
        return self._entry_actions

    @property
    def exit_actions(self) -> List[TransitionAction]:
        return self._exit_actions

    @property
    def superstate(self) -> Optional[StateRepresentation]:
        if self._graph is None:
            return None
        return self._graph.get_superstate(self._state)

    @property
    def substates(self) -> List[StateRepresentation]:
        if self._graph is None:
            return []
        return self._graph.get_substates(self._state)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_trigger_behaviour(self, behaviour: TriggerBehaviour) -> None:
        """
        Register a behaviour. Several behaviours may share a trigger; they are
        evaluated in registration order.
        """
        self._trigger_behaviours.setdefault(behaviour.trigger, []).append(behaviour)

    def add_entry_action(self, action: TransitionAction, trigger: Any = ANY_TRIGGER) -> None:
        """
        Append an entry action.

        :param action: Callable receiving the transition and the context.
        :param trigger: If given, the action only runs when the state is
            entered through this trigger.
        """
        if trigger is ANY_TRIGGER:
            self._entry_actions.append(action)
            return

        def entry_from(transition: Transition, context: Any) -> None:
            if not transition.is_initial and transition.trigger == trigger:
                action(transition, context)

        self._entry_actions.append(entry_from)

    def add_exit_action(self, action: TransitionAction) -> None:
        self._exit_actions.append(action)

    # ------------------------------------------------------------------
    # Guard resolution
    # ------------------------------------------------------------------

    def try_find_local_handler(self, trigger: Any, context: Any) -> Optional[TriggerBehaviour]:
        """
        Find the behaviour registered on this state for a trigger whose guard
        holds for the given context.

        :raises GuardAmbiguityError: If more than one guard holds.
        """
        possible = self._trigger_behaviours.get(trigger)
        if not possible:
            return None

        actual = [b for b in possible if b.is_guard_condition_met(context)]
        if len(actual) > 1:
            raise GuardAmbiguityError(self._state, trigger)
        return actual[0] if actual else None

    def try_find_handler(self, trigger: Any, context: Any) -> Optional[TriggerBehaviour]:
        """Find a handler on this state, falling back to its superstates."""
        result = self.try_find_local_handler(trigger, context)
        if result is None:
            superstate = self.superstate
            if superstate is not None:
                result = superstate.try_find_handler(trigger, context)
        return result

    def can_handle(self, trigger: Any, context: Any) -> bool:
        return self.try_find_handler(trigger, context) is not None

    def permitted_triggers(self, context: Any) -> Set[Any]:
        """Triggers with at least one satisfied guard here or in any superstate."""
        result = set()
        for trigger, behaviours in self._trigger_behaviours.items():
            if any(b.is_guard_condition_met(context) for b in behaviours):
                result.add(trigger)

        superstate = self.superstate
        if superstate is not None:
            result |= superstate.permitted_triggers(context)
        return result

    # ------------------------------------------------------------------
    # Containment
    # ------------------------------------------------------------------

    def includes(self, state: Any) -> bool:
        """True if `state` is this state or nested anywhere within it."""
        if self._state == state:
            return True
        return any(sub.includes(state) for sub in self.substates)

    def is_included_in(self, state: Any) -> bool:
        """True if this state is `state` or nested anywhere within it."""
        if self._state == state:
            return True
        if self._graph is None:
            return False
        return state in self._graph.get_ancestors(self._state)

    # ------------------------------------------------------------------
    # Entry / exit
    # ------------------------------------------------------------------

    def enter(self, transition: Transition, context: Any) -> None:
        """
        Run entry actions for a transition arriving at this state.

        Superstates are entered before substates. Nothing runs when arriving
        from within this state's own subtree, except on reentry where only
        this state's actions run.
        """
        if transition.is_reentry:
            self.execute_entry_actions(transition, context)
        elif not self.includes(transition.source):
            superstate = self.superstate
            if superstate is not None:
                superstate.enter(transition, context)
            self.execute_entry_actions(transition, context)

    def exit(self, transition: Transition, context: Any) -> None:
        """
        Run exit actions for a transition leaving this state.

        Substates are exited before superstates. Nothing runs when the
        destination lies within this state's own subtree, except on reentry
        where only this state's actions run.
        """
        if transition.is_reentry:
            self.execute_exit_actions(transition, context)
        elif not self.includes(transition.destination):
            self.execute_exit_actions(transition, context)
            superstate = self.superstate
            if superstate is not None:
                superstate.exit(transition, context)

    def execute_entry_actions(self, transition: Transition, context: Any) -> None:
        for action in self._entry_actions:
            action(transition, context)

    def execute_exit_actions(self, transition: Transition, context: Any) -> None:
        for action in self._exit_actions:
            action(transition, context)
