# hfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class HookProtocol(Protocol):
    """
    Observer of a state machine's firing. Both methods are optional; a hook
    only needs the ones it cares about.
    """

    def on_trigger(self, trigger: Any) -> None: ...

    def on_transition(self, trigger: Any, source: Any, destination: Any) -> None: ...


class HookManager:
    """
    Manages the registration and execution of hooks that listen to the firing
    of triggers and the resulting transitions. Users can attach logging,
    tracing, or custom side effects without altering core logic.
    """

    def __init__(self, hooks: Optional[List[Any]] = None) -> None:
        self._hooks: List[Any] = list(hooks or [])

    @property
    def hooks(self) -> List[Any]:
        return list(self._hooks)

    def register_hook(self, hook: Any) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing some of the HookProtocol methods.
        """
        self._hooks.append(hook)

    def execute_on_trigger(self, trigger: Any) -> None:
        """Run all hooks' on_trigger logic when a trigger is fired."""
        for hook in self._hooks:
            if hasattr(hook, "on_trigger"):
                hook.on_trigger(trigger)

    def execute_on_transition(self, trigger: Any, source: Any, destination: Any) -> None:
        """Run all hooks' on_transition logic once a transition has completed."""
        for hook in self._hooks:
            if hasattr(hook, "on_transition"):
                hook.on_transition(trigger, source, destination)
