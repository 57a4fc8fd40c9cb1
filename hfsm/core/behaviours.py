# hfsm/core/behaviours.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Trigger behaviours describe what happens when a specific trigger fires from a
specific state. The set of variants is closed:

- TransitioningTriggerBehaviour: move to a fixed destination.
- InternalTriggerBehaviour: run the action, stay put, no entry/exit.
- DynamicTriggerBehaviour: destination chosen at fire time from the context.

Computing the destination is kept apart from running the action so the
engine can build the Transition record before any action runs.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union

Guard = Callable[[Any], bool]
Action = Callable[[Any], None]
Selector = Callable[[Any], Any]


def always(context: Any) -> bool:
    """Guard that always passes."""
    return True


def no_action(context: Any) -> None:
    """Action that does nothing."""


@dataclass(frozen=True)
class _GuardedBehaviour:
    """Fields and operations shared by every behaviour variant."""

    trigger: Any
    guard: Guard
    action: Action

    def is_guard_condition_met(self, context: Any) -> bool:
        # Guards may be evaluated several times per fire, including while
        # enumerating permitted triggers.
        return bool(self.guard(context))

    def perform_action(self, context: Any) -> None:
        self.action(context)


@dataclass(frozen=True)
class TransitioningTriggerBehaviour(_GuardedBehaviour):
    destination: Any

    @property
    def is_internal(self) -> bool:
        return False

    def transitions_to(self, source: Any, context: Any) -> Any:
        # Every variant defers to destination_of, the one dispatch over the closed set.
        return destination_of(self, source, context)


@dataclass(frozen=True)
class InternalTriggerBehaviour(_GuardedBehaviour):
    @property
    def is_internal(self) -> bool:
        return True

    def transitions_to(self, source: Any, context: Any) -> Any:
        return destination_of(self, source, context)


@dataclass(frozen=True)
class DynamicTriggerBehaviour(_GuardedBehaviour):
    selector: Selector

    @property
    def is_internal(self) -> bool:
        return False

    def transitions_to(self, source: Any, context: Any) -> Any:
        return destination_of(self, source, context)


TriggerBehaviour = Union[TransitioningTriggerBehaviour, InternalTriggerBehaviour, DynamicTriggerBehaviour]


def destination_of(behaviour: TriggerBehaviour, source: Any, context: Any) -> Any:
    """
    Compute where a behaviour leads without running its action.

    :param behaviour: One of the three trigger behaviour variants.
    :param source: The state the trigger is fired from.
    :param context: The machine's context, passed to dynamic selectors.
    :return: The destination state.
    :raises TypeError: If behaviour is not one of the known variants.
    """
    if isinstance(behaviour, TransitioningTriggerBehaviour):
        return behaviour.destination
    if isinstance(behaviour, InternalTriggerBehaviour):
        return source
    if isinstance(behaviour, DynamicTriggerBehaviour):
        return behaviour.selector(context)
    raise TypeError(f"Unknown trigger behaviour: {behaviour!r}")
