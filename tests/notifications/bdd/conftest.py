"""Shared BDD fixtures and step definitions for the Notifications domain."""

import pytest
from dispatch.config import DispatchSettings
from dispatch.random_source import ScriptedRandomSource
from notifications.channel import build_notification_service
from pytest_bdd import given


@pytest.fixture()
def error():
    """Container for the captured dispatch error."""
    return {"exc": None}


@given("a notification service that never fails", target_fixture="service")
def service_that_never_fails():
    return build_notification_service(DispatchSettings(_env_file=None), ScriptedRandomSource([0.99]))


@given("a notification service that always fails", target_fixture="service")
def service_that_always_fails():
    return build_notification_service(DispatchSettings(_env_file=None), ScriptedRandomSource([0.0]))
