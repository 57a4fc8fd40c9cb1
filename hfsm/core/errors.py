# hfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any


class HFSMError(Exception):
    """
    Base exception class for errors within the hierarchical state machine library.
    """


class GuardAmbiguityError(HFSMError):
    """
    Raised when more than one guarded behaviour for the same trigger in the same
    state is satisfied at once. Guards for one trigger within one state must be
    mutually exclusive.
    """

    def __init__(self, state: Any, trigger: Any) -> None:
        super().__init__(
            f"Multiple permitted exit transitions are configured from state '{state}' "
            f"for trigger '{trigger}'. Guard clauses must be mutually exclusive."
        )
        self.state = state
        self.trigger = trigger


class UnhandledTriggerError(HFSMError):
    """
    Raised by the default unhandled-trigger policy when no behaviour resolves
    for a fired trigger.
    """

    def __init__(self, state: Any, trigger: Any) -> None:
        super().__init__(
            f"No valid leaving transitions are permitted from state '{state}' "
            f"for trigger '{trigger}'. Consider ignoring the trigger."
        )
        self.state = state
        self.trigger = trigger


class AlreadyStartedError(HFSMError):
    """
    Raised when the initial transition is fired more than once, or after
    ordinary firing has begun.
    """


class ConfigurationError(HFSMError, ValueError):
    """
    Raised when the configuration API is misused.
    """


class IdentityTransitionError(ConfigurationError):
    """
    Raised when an ordinary transition is registered whose destination is its
    own source state. Such triggers must use the internal or reentry path.
    """

    def __init__(self, state: Any) -> None:
        super().__init__(
            f"permit() requires that the destination state is not equal to the source "
            f"state '{state}'. To accept a trigger without changing state, use ignore(), "
            f"permit_internal() or permit_reentry()."
        )
        self.state = state
