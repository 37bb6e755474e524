"""Pytest configuration and fixtures."""

import random
import tempfile
from pathlib import Path

import pytest

from dbchat.conversation import ConversationEngine
from dbchat.interpreter import InterpretedResponse
from dbchat.script import ScriptTable
from dbchat.workflows import CREATE_DATABASE, food_delivery_script


class FakeResponder:
    """Stands in for the live agent; records what it was sent."""

    def __init__(self, response=None, error=None):
        self.response = response or InterpretedResponse(message="Live reply")
        self.error = error
        self.calls = []

    def __call__(self, messages, context):
        self.calls.append((messages, context))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def responder():
    """Fake live agent."""
    return FakeResponder()


@pytest.fixture
def engine():
    """Engine running the food delivery script without delays."""
    return ConversationEngine(
        CREATE_DATABASE,
        script=food_delivery_script(),
        simulate_delays=False,
    )


@pytest.fixture
def live_engine(responder):
    """Engine without a script; every turn goes to the fake responder."""
    return ConversationEngine(
        CREATE_DATABASE,
        script=ScriptTable(),
        responder=responder,
        simulate_delays=False,
    )
