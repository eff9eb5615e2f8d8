"""Pytest configuration and shared fixtures."""

import pytest

from linkwatch.core.events import EventDispatcher
from linkwatch.core.network_manager import NetworkManager
from linkwatch.domain.config import LinkwatchConfig
from tests.helpers.fakes import EventRecorder, InMemoryStore, ManualClock, ScriptedProbe


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at t=0."""
    return ManualClock()


@pytest.fixture
def probe() -> ScriptedProbe:
    """Probe that reports LAN reachability until a test changes it."""
    return ScriptedProbe()


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def recorder(dispatcher: EventDispatcher) -> EventRecorder:
    """Records every event published on the ``dispatcher`` fixture."""
    return EventRecorder(dispatcher)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def manager(
    clock: ManualClock, probe: ScriptedProbe, dispatcher: EventDispatcher
) -> NetworkManager:
    """NetworkManager with default config wired to the fake clock and probe."""
    return NetworkManager(LinkwatchConfig.default(), clock, probe, dispatcher)
