# Area: Lobby Tests
"""Tests for concurrent lobby access."""

import threading

import pytest

from scrimflow._lobby.engine import LobbyEngine
from scrimflow._lobby.enums import CheckInResult, LobbyState, MatchFormat
from scrimflow._lobby.session import MAX_PLAYERS
from scrimflow._lobby.store import SessionStore
from scrimflow.errors import CapacityReached, InvalidState, NoSession, Rejected
from scrimflow.messenger import DirectMessenger


class GatedMessenger(DirectMessenger):
    """Blocks the first delivery until released."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.sent = []

    def send_direct(self, player_id, message):
        self.started.set()
        assert self.release.wait(timeout=5)
        self.sent.append(player_id)
        return True


def run_threads(target, count):
    threads = [threading.Thread(target=target, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)


class TestConcurrentCheckIn:
    """Tests for simultaneous check-ins."""

    def test_distinct_players_all_recorded(self, engine):
        engine.open("host@test.com", MatchFormat.SOLO, "Europe")
        results = []

        def check_in(i):
            results.append(engine.check_in(f"p{i}@test.com", f"Player{i}"))

        run_threads(check_in, 50)

        assert len(results) == 50
        assert all(r == CheckInResult.CHECKED_IN for r in results)
        assert engine.snapshot().player_count == 50

    def test_same_player_recorded_once(self, engine):
        engine.open("host@test.com", MatchFormat.SOLO, "Europe")
        results = []

        def check_in(i):
            results.append(engine.check_in("p1@test.com", "PlayerOne"))

        run_threads(check_in, 20)

        assert results.count(CheckInResult.CHECKED_IN) == 1
        assert results.count(CheckInResult.ALREADY_CHECKED_IN) == 19
        assert engine.snapshot().player_count == 1

    def test_capacity_never_exceeded(self, engine):
        engine.open("host@test.com", MatchFormat.SOLO, "Europe")
        full = []

        def check_in(i):
            try:
                engine.check_in(f"p{i}@test.com", f"Player{i}")
            except CapacityReached:
                full.append(i)

        run_threads(check_in, MAX_PLAYERS + 20)

        assert engine.snapshot().player_count == MAX_PLAYERS
        assert len(full) == 20


class TestDistributeConcurrency:
    """Tests for operations racing a running fan-out."""

    def setup_distribution(self):
        messenger = GatedMessenger()
        engine = LobbyEngine(SessionStore(), messenger, pacing_seconds=0)
        engine.open("host@test.com", MatchFormat.DUO, "Europe")
        engine.check_in("p1@test.com", "PlayerOne")
        engine.check_in("p2@test.com", "PlayerTwo")

        reports = []
        worker = threading.Thread(target=lambda: reports.append(engine.distribute("CODE")))
        worker.start()
        assert messenger.started.wait(timeout=5)
        return engine, messenger, worker, reports

    def test_check_in_rejected_during_fan_out(self):
        """Test that the roster is frozen once distribution starts."""
        engine, messenger, worker, reports = self.setup_distribution()
        try:
            assert engine.snapshot().state == LobbyState.DISTRIBUTING
            with pytest.raises(Rejected):
                engine.check_in("late@test.com", "LatePlayer")
            with pytest.raises(InvalidState):
                engine.distribute("OTHER")
        finally:
            messenger.release.set()
            worker.join(timeout=10)

        assert reports[0].roster_size == 2
        assert messenger.sent == ["p1@test.com", "p2@test.com"]

    def test_status_readable_during_fan_out(self):
        engine, messenger, worker, reports = self.setup_distribution()
        try:
            snapshot = engine.snapshot()
            assert snapshot.code_distributed is True
            assert snapshot.player_count == 2
        finally:
            messenger.release.set()
            worker.join(timeout=10)

    def test_end_during_fan_out(self):
        """Test that End() clears the lobby while the fan-out finishes."""
        engine, messenger, worker, reports = self.setup_distribution()

        ended = engine.end()
        assert ended.state == LobbyState.DISTRIBUTING
        assert engine.snapshot() is None

        messenger.release.set()
        worker.join(timeout=10)

        report = reports[0]
        assert report.completed is False
        assert report.sent_count == 2
        assert engine.snapshot() is None

    def test_new_lobby_survives_old_fan_out(self):
        """Test that a finishing fan-out leaves a newer lobby alone."""
        engine, messenger, worker, reports = self.setup_distribution()

        engine.end()
        fresh = engine.open("host@test.com", MatchFormat.SQUAD, "Brazil")

        messenger.release.set()
        worker.join(timeout=10)

        assert reports[0].completed is False
        current = engine.snapshot()
        assert current is not None
        assert current.session_id == fresh.session_id
        assert current.state == LobbyState.OPEN

    def test_concurrent_distribute_only_one_wins(self, messenger):
        engine = LobbyEngine(SessionStore(), messenger, pacing_seconds=0)
        engine.open("host@test.com", MatchFormat.DUO, "Europe")
        engine.check_in("p1@test.com", "PlayerOne")
        engine.lock()
        outcomes = []

        def distribute(i):
            try:
                engine.distribute(f"CODE-{i}")
                outcomes.append("ok")
            except (InvalidState, NoSession) as e:
                outcomes.append(type(e).__name__)

        run_threads(distribute, 5)

        assert outcomes.count("ok") == 1
        assert len(messenger.sent) == 1
