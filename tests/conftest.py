# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "hierarchy: mark test as exercising superstate/substate behaviour")


@pytest.fixture
def config():
    """An empty, reusable configuration."""
    from hfsm.core.configuration import StateMachineConfig

    return StateMachineConfig()


@pytest.fixture
def graph():
    """An empty state graph."""
    from hfsm.runtime.graph import StateGraph

    return StateGraph()


@pytest.fixture
def machine_factory(config):
    """Returns a factory creating machines over the shared `config` fixture."""
    from hfsm.core.state_machine import StateMachine

    def _factory(initial, context=None, **kwargs):
        return StateMachine(initial, context, config, **kwargs)

    return _factory


@pytest.fixture
def recorder():
    """Collects (label, transition) pairs from entry/exit actions in call order."""
    calls = []

    def _make(label):
        def action(transition, context):
            calls.append((label, transition))

        return action

    _make.calls = calls
    _make.labels = lambda: [label for label, _ in calls]
    return _make


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from hfsm.core.errors import (
        AlreadyStartedError,
        ConfigurationError,
        GuardAmbiguityError,
        HFSMError,
        IdentityTransitionError,
        UnhandledTriggerError,
    )

    return (
        HFSMError,
        GuardAmbiguityError,
        UnhandledTriggerError,
        AlreadyStartedError,
        ConfigurationError,
        IdentityTransitionError,
    )
