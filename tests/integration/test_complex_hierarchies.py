# tests/integration/test_complex_hierarchies.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from hfsm import StateMachine, StateMachineConfig


class Trace:
    """Records entry/exit actions as 'enter:X' / 'exit:X'."""

    def __init__(self):
        self.events = []

    def entry(self, name):
        return lambda ctx: self.events.append(f"enter:{name}")

    def exit(self, name):
        return lambda ctx: self.events.append(f"exit:{name}")

    def watch(self, config, *states):
        for s in states:
            config.configure(s).on_entry(self.entry(s)).on_exit(self.exit(s))


@pytest.fixture
def trace():
    return Trace()


@pytest.fixture
def active_config(trace):
    """
    Active (superstate)
    ├─ Idle
    └─ Running
    Shutdown

    Idle -Start-> Running, Running -Pause-> Idle, Active -Stop-> Shutdown
    """
    config = StateMachineConfig()
    config.configure("Idle").substate_of("Active").permit("Start", "Running")
    config.configure("Running").substate_of("Active").permit("Pause", "Idle")
    config.configure("Active").permit("Stop", "Shutdown")
    config.configure("Shutdown").permit("Boot", "Idle")
    trace.watch(config, "Active", "Idle", "Running", "Shutdown")
    return config


@pytest.mark.hierarchy
def test_inherited_trigger_from_superstate(active_config, trace):
    machine = StateMachine("Idle", config=active_config)
    assert machine.can_fire("Stop")
    assert machine.permitted_triggers == {"Start", "Stop"}

    machine.fire("Stop")
    assert machine.state == "Shutdown"
    assert trace.events == ["exit:Idle", "exit:Active", "enter:Shutdown"]


@pytest.mark.hierarchy
def test_entering_substate_from_outside_enters_superstate_first(active_config, trace):
    machine = StateMachine("Shutdown", config=active_config)
    machine.fire("Boot")
    assert trace.events == ["exit:Shutdown", "enter:Active", "enter:Idle"]


@pytest.mark.hierarchy
def test_sibling_transitions_stay_inside_superstate(active_config, trace):
    machine = StateMachine("Idle", config=active_config)
    machine.fire("Start")
    machine.fire("Pause")
    assert trace.events == ["exit:Idle", "enter:Running", "exit:Running", "enter:Idle"]


@pytest.mark.hierarchy
def test_is_in_state_includes_superstates(active_config):
    machine = StateMachine("Running", config=active_config)
    assert machine.is_in_state("Running")
    assert machine.is_in_state("Active")
    assert not machine.is_in_state("Idle")
    assert not machine.is_in_state("Shutdown")


@pytest.mark.hierarchy
def test_initial_transition_enters_superstate_chain(active_config, trace):
    machine = StateMachine("Idle", config=active_config)
    machine.fire_initial_transition()
    assert trace.events == ["enter:Active", "enter:Idle"]


@pytest.mark.hierarchy
def test_reentry_of_substate_does_not_touch_superstate(active_config, trace):
    active_config.configure("Running").permit_reentry("Restart")
    machine = StateMachine("Running", config=active_config)
    machine.fire("Restart")
    assert trace.events == ["exit:Running", "enter:Running"]


@pytest.fixture
def deep_config(trace):
    """
    Root
    ├─ SubA
    │   ├─ A1
    │   └─ A2
    └─ SubB
        ├─ B1
        └─ B2
            ├─ B2a
            └─ B2b
    """
    config = StateMachineConfig()
    for child, parent in [
        ("SubA", "Root"),
        ("A1", "SubA"),
        ("A2", "SubA"),
        ("SubB", "Root"),
        ("B1", "SubB"),
        ("B2", "SubB"),
        ("B2a", "B2"),
        ("B2b", "B2"),
    ]:
        config.configure(child).substate_of(parent)

    config.configure("A1").permit("goA2", "A2")
    config.configure("A2").permit("switch_to_B", "B2b")
    config.configure("B2b").permit("reset_to_A1", "A1")
    config.configure("SubB").permit("leave", "Outside")
    trace.watch(config, "Root", "SubA", "A1", "A2", "SubB", "B1", "B2", "B2a", "B2b", "Outside")
    return config


@pytest.mark.hierarchy
def test_crossing_subtrees_exits_and_enters_up_to_common_ancestor(deep_config, trace):
    machine = StateMachine("A2", config=deep_config)
    machine.fire("switch_to_B")
    assert machine.state == "B2b"
    assert trace.events == ["exit:A2", "exit:SubA", "enter:SubB", "enter:B2", "enter:B2b"]


@pytest.mark.hierarchy
def test_full_cycle(deep_config, trace):
    machine = StateMachine("A1", config=deep_config)
    machine.fire_initial_transition()
    machine.fire("goA2")
    machine.fire("switch_to_B")
    machine.fire("reset_to_A1")
    assert machine.state == "A1"
    assert trace.events == [
        "enter:Root",
        "enter:SubA",
        "enter:A1",
        "exit:A1",
        "enter:A2",
        "exit:A2",
        "exit:SubA",
        "enter:SubB",
        "enter:B2",
        "enter:B2b",
        "exit:B2b",
        "exit:B2",
        "exit:SubB",
        "enter:SubA",
        "enter:A1",
    ]


@pytest.mark.hierarchy
def test_leaving_whole_hierarchy_from_deep_leaf(deep_config, trace):
    machine = StateMachine("B2a", config=deep_config)
    assert machine.can_fire("leave")
    machine.fire("leave")
    assert machine.state == "Outside"
    assert trace.events == ["exit:B2a", "exit:B2", "exit:SubB", "exit:Root", "enter:Outside"]
    assert not machine.is_in_state("Root")


@pytest.mark.hierarchy
def test_dynamic_transition_into_hierarchy(deep_config, trace):
    deep_config.configure("Outside").permit_dynamic("return", lambda ctx: ctx["target"])
    machine = StateMachine("Outside", {"target": "B1"}, deep_config)
    machine.fire("return")
    assert machine.state == "B1"
    assert trace.events == ["exit:Outside", "enter:Root", "enter:SubB", "enter:B1"]
