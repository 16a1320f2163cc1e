# Area: Test Fixtures
"""Shared fixtures for scrimflow tests."""

import os
import tempfile
import threading

import pytest

from scrimflow._lobby.engine import LobbyEngine
from scrimflow._lobby.store import SessionStore
from scrimflow._registry.database import init_database
from scrimflow._registry.repo_players import PlayerRepository
from scrimflow.messenger import DirectMessenger


class RecordingMessenger(DirectMessenger):
    """Messenger that records deliveries and fails for chosen players."""

    def __init__(self, fail_for=(), raise_for=()):
        self.fail_for = set(fail_for)
        self.raise_for = set(raise_for)
        self.sent = []
        self._lock = threading.Lock()

    def send_direct(self, player_id, message):
        if player_id in self.raise_for:
            raise ConnectionError("DMs closed")
        if player_id in self.fail_for:
            return False
        with self._lock:
            self.sent.append((player_id, message))
        return True

    @property
    def recipients(self):
        return [player_id for player_id, _ in self.sent]


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def engine(store, messenger):
    """Engine with pacing disabled."""
    return LobbyEngine(store, messenger, pacing_seconds=0, sleep=lambda s: None)


@pytest.fixture
def db_path():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_database(path)
    yield path
    os.unlink(path)


@pytest.fixture
def players(db_path):
    return PlayerRepository(db_path)


@pytest.fixture
def make_messenger():
    """Build a RecordingMessenger with chosen failures."""
    return RecordingMessenger


@pytest.fixture
def clock():
    return FakeClock(start=0.0)
