"""Graph-based state machine structure management."""

from typing import Any, Dict, Iterator, List, Optional

from ..core.states import StateRepresentation

_NO_PARENT = object()


class StateGraph:
    """
    Owns every StateRepresentation of a configuration, keyed by state
    identity, and the superstate/substate links between them.

    Representations never hold references to each other; hierarchy is kept
    here as state identities and resolved on demand.
    """

    def __init__(self) -> None:
        self._nodes: Dict[Any, StateRepresentation] = {}
        self._parent_map: Dict[Any, Any] = {}
        self._children: Dict[Any, List[Any]] = {}

    def __contains__(self, state: Any) -> bool:
        return state in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[StateRepresentation]:
        return iter(list(self._nodes.values()))

    def get_representation(self, state: Any) -> Optional[StateRepresentation]:
        """Return the representation for a state, or None if never configured."""
        return self._nodes.get(state)

    def get_or_create_representation(self, state: Any) -> StateRepresentation:
        """Return the representation for a state, creating it on first use."""
        node = self._nodes.get(state)
        if node is None:
            node = StateRepresentation(state, graph=self)
            self._nodes[state] = node
            self._parent_map[state] = _NO_PARENT
            self._children[state] = []
        return node

    def set_superstate(self, state: Any, superstate: Any) -> None:
        """
        Record that `state` is nested within `superstate`. Both sides of the
        link are updated together. Cycles are not detected; a cyclic hierarchy
        makes containment and dispatch queries never terminate.
        """
        self.get_or_create_representation(state)
        self.get_or_create_representation(superstate)

        previous = self._parent_map[state]
        if previous is not _NO_PARENT:
            self._children[previous].remove(state)

        self._parent_map[state] = superstate
        self._children[superstate].append(state)

    def get_superstate(self, state: Any) -> Optional[StateRepresentation]:
        parent = self._parent_map.get(state, _NO_PARENT)
        if parent is _NO_PARENT:
            return None
        return self._nodes[parent]

    def get_substates(self, state: Any) -> List[StateRepresentation]:
        return [self._nodes[child] for child in self._children.get(state, [])]

    def get_ancestors(self, state: Any) -> List[Any]:
        """Get all ancestor states in order from immediate parent to root."""
        ancestors = []
        current = self._parent_map.get(state, _NO_PARENT)
        while current is not _NO_PARENT:
            ancestors.append(current)
            current = self._parent_map.get(current, _NO_PARENT)
        return ancestors

    def get_all_states(self) -> List[Any]:
        return list(self._nodes)
