# hfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Transition:
    """
    Describes one firing: the state being left, the state being entered and
    the trigger that caused it. Created fresh for every fire and handed to
    entry and exit actions.

    The synthetic initial transition has neither source nor trigger.
    """

    source: Optional[Any]
    destination: Any
    trigger: Optional[Any] = None

    @property
    def is_reentry(self) -> bool:
        """True if the transition leaves and re-enters the same state."""
        return self.source == self.destination

    @property
    def is_initial(self) -> bool:
        return self.source is None and self.trigger is None
