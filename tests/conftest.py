"""Shared fixtures for the engine test suite."""

import pytest

from pigre.config import Settings
from pigre.ledger import EventLog, LedgerStore
from pigre.playback import PresetSequencer
from pigre.simulation import SimulationEngine
from pigre.use_cases import MissionControl


@pytest.fixture
def settings():
    """Fresh default settings (not the cached instance)."""
    return Settings.from_env()


@pytest.fixture
def engine(settings):
    return SimulationEngine(settings.engine, settings.conversion)


@pytest.fixture
def ledger(settings):
    return LedgerStore(settings.ledger)


@pytest.fixture
def events(settings):
    return EventLog(settings.events)


@pytest.fixture
def sequencer(engine, ledger, events, settings):
    return PresetSequencer(engine, ledger, events, settings.playback)


@pytest.fixture
def console(settings):
    return MissionControl(settings)


@pytest.fixture
def no_sleep():
    """Sleep stand-in that records requested delays."""
    delays = []

    def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
