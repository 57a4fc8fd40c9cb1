# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest


def test_error_hierarchy(error_classes):
    HFSMError, GuardAmbiguityError, UnhandledTriggerError, AlreadyStartedError, ConfigurationError, IdentityTransitionError = (
        error_classes
    )
    assert issubclass(GuardAmbiguityError, HFSMError)
    assert issubclass(UnhandledTriggerError, HFSMError)
    assert issubclass(AlreadyStartedError, HFSMError)
    assert issubclass(ConfigurationError, HFSMError)
    assert issubclass(IdentityTransitionError, ConfigurationError)


def test_configuration_error_is_value_error():
    from hfsm.core.errors import ConfigurationError, IdentityTransitionError

    assert issubclass(ConfigurationError, ValueError)
    with pytest.raises(ValueError):
        raise IdentityTransitionError("Open")


def test_guard_ambiguity_names_state_and_trigger():
    from hfsm.core.errors import GuardAmbiguityError

    e = GuardAmbiguityError("A", "Go")
    assert e.state == "A"
    assert e.trigger == "Go"
    assert "'A'" in str(e)
    assert "'Go'" in str(e)
    assert "mutually exclusive" in str(e)


def test_unhandled_trigger_names_state_and_trigger():
    from hfsm.core.errors import UnhandledTriggerError

    e = UnhandledTriggerError("Closed", "Toggle")
    assert (e.state, e.trigger) == ("Closed", "Toggle")
    assert "'Closed'" in str(e)
    assert "'Toggle'" in str(e)


def test_identity_transition_names_state():
    from hfsm.core.errors import IdentityTransitionError

    e = IdentityTransitionError("Open")
    assert e.state == "Open"
    assert "permit_reentry" in str(e)


def test_error_empty_messages():
    from hfsm.core.errors import AlreadyStartedError, ConfigurationError, HFSMError

    assert str(HFSMError()) == ""
    assert str(AlreadyStartedError()) == ""
    assert str(ConfigurationError()) == ""
