"""Read-only projections of a configured topology for visualisation tools."""

from typing import Any, Iterator, List, TextIO, Tuple

from ..core.behaviours import TransitioningTriggerBehaviour
from .graph import StateGraph


def iter_edges(graph: StateGraph) -> Iterator[Tuple[Any, Any, Any]]:
    """
    Yield (source, destination, trigger) for every fixed-destination
    transition in the graph. Internal and dynamic behaviours have no static
    edge and are skipped.
    """
    for node in graph:
        for trigger, behaviours in node.trigger_behaviours.items():
            for behaviour in behaviours:
                if isinstance(behaviour, TransitioningTriggerBehaviour):
                    yield node.state, behaviour.destination, trigger


def to_edge_list(graph: StateGraph, print_labels: bool = True) -> List[str]:
    """
    Render each edge as ``source -> destination [label]``.

    :param graph: The configured topology.
    :param print_labels: Append the trigger as a bracketed label.
    """
    lines = []
    for source, destination, trigger in iter_edges(graph):
        if print_labels:
            lines.append(f"{source} -> {destination} [{trigger}]")
        else:
            lines.append(f"{source} -> {destination}")
    return lines


def write_dot(graph: StateGraph, stream: TextIO, print_labels: bool = False) -> None:
    """Write the edges as a Graphviz ``digraph`` document."""
    stream.write("digraph G {\n")
    for source, destination, trigger in iter_edges(graph):
        if print_labels:
            stream.write(f'\t{source} -> {destination} [label = "{trigger}" ];\n')
        else:
            stream.write(f"\t{source} -> {destination};\n")
    stream.write("}")
