# Area: Lobby Tests
"""Tests for LobbyEngine operations."""

import pytest

from scrimflow._lobby.engine import LobbyEngine
from scrimflow._lobby.enums import CheckInResult, LobbyState, MatchFormat
from scrimflow._lobby.fanout import MATCH_CODE_MESSAGE_TYPE
from scrimflow._lobby.session import MAX_PLAYERS, PresentationHandle
from scrimflow._lobby.store import SessionStore
from scrimflow.errors import (
    AlreadyActive,
    CapacityReached,
    InvalidState,
    NoSession,
    Rejected,
)


def open_squad(engine):
    return engine.open("host@test.com", MatchFormat.SQUAD, "Europe")


class TestOpen:
    """Tests for opening a lobby."""

    def test_open_creates_open_lobby(self, engine):
        """Test that open() installs an OPEN lobby with an empty roster."""
        snapshot = open_squad(engine)

        assert snapshot.state == LobbyState.OPEN
        assert snapshot.host_id == "host@test.com"
        assert snapshot.format == MatchFormat.SQUAD
        assert snapshot.region == "Europe"
        assert snapshot.player_count == 0
        assert snapshot.code_distributed is False
        assert snapshot.session_id.startswith("scrim-")

    def test_open_records_start_time(self, store, messenger, clock):
        clock.advance(1234.5)
        engine = LobbyEngine(store, messenger, clock=clock)
        assert open_squad(engine).start_time == 1234.5

    def test_open_twice_raises_already_active(self, engine):
        """Test that a second open() fails while a lobby exists."""
        first = open_squad(engine)
        with pytest.raises(AlreadyActive) as exc:
            engine.open("other@test.com", MatchFormat.DUO, "Brazil")

        assert exc.value.session_id == first.session_id
        # Existing lobby untouched
        assert engine.snapshot().session_id == first.session_id
        assert engine.snapshot().host_id == "host@test.com"

    def test_snapshot_none_when_absent(self, engine):
        assert engine.snapshot() is None
        assert engine.is_open() is False


class TestCheckIn:
    """Tests for player check-in."""

    def test_check_in_adds_player(self, engine):
        open_squad(engine)
        assert engine.check_in("p1@test.com", "PlayerOne") == CheckInResult.CHECKED_IN

        snapshot = engine.snapshot()
        assert snapshot.player_count == 1
        assert snapshot.roster[0].epic_name == "PlayerOne"

    def test_check_in_is_idempotent(self, engine):
        """Test that a repeat check-in keeps the original record."""
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        first = engine.snapshot().roster[0]

        result = engine.check_in("p1@test.com", "RenamedPlayer")

        assert result == CheckInResult.ALREADY_CHECKED_IN
        snapshot = engine.snapshot()
        assert snapshot.player_count == 1
        assert snapshot.roster[0] == first

    def test_check_in_without_lobby_raises_no_session(self, engine):
        with pytest.raises(NoSession):
            engine.check_in("p1@test.com", "PlayerOne")

    def test_check_in_after_lock_rejected(self, engine):
        """Test that check-in is refused once the lobby is locked."""
        open_squad(engine)
        engine.lock()
        with pytest.raises(Rejected) as exc:
            engine.check_in("p1@test.com", "PlayerOne")
        assert exc.value.state == "LOCKED"
        assert engine.snapshot().player_count == 0

    def test_capacity_reached_on_101st(self, engine):
        open_squad(engine)
        for i in range(MAX_PLAYERS):
            engine.check_in(f"p{i}@test.com", f"Player{i}")

        with pytest.raises(CapacityReached):
            engine.check_in("late@test.com", "LatePlayer")
        assert engine.snapshot().player_count == MAX_PLAYERS

    def test_repeat_check_in_on_full_lobby_succeeds(self, store, messenger):
        """Test that an existing player is not refused by a full roster."""
        engine = LobbyEngine(store, messenger, capacity=2)
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        engine.check_in("p2@test.com", "PlayerTwo")

        assert engine.check_in("p1@test.com", "PlayerOne") == CheckInResult.ALREADY_CHECKED_IN


class TestLock:
    """Tests for locking a lobby."""

    def test_lock_moves_to_locked(self, engine):
        open_squad(engine)
        snapshot = engine.lock()
        assert snapshot.state == LobbyState.LOCKED
        assert engine.is_open() is False

    def test_lock_twice_raises_invalid_state(self, engine):
        open_squad(engine)
        engine.lock()
        with pytest.raises(InvalidState):
            engine.lock()

    def test_lock_without_lobby_raises_no_session(self, engine):
        with pytest.raises(NoSession):
            engine.lock()


class TestDistribute:
    """Tests for match code distribution."""

    def test_distribute_notifies_roster_and_clears(self, engine, messenger):
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        engine.check_in("p2@test.com", "PlayerTwo")
        engine.lock()

        report = engine.distribute("X9Y-22B")

        assert report.sent_count == 2
        assert report.roster_size == 2
        assert report.failed == []
        assert report.completed is True
        assert messenger.recipients == ["p1@test.com", "p2@test.com"]
        assert engine.snapshot() is None

    def test_code_message_content(self, engine, messenger):
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        engine.distribute("ABC-123")

        _, message = messenger.sent[0]
        assert message["message_type"] == MATCH_CODE_MESSAGE_TYPE
        assert message["payload"]["code"] == "ABC-123"
        assert message["payload"]["format"] == "SQUAD"
        assert message["payload"]["region"] == "Europe"

    def test_distribute_from_open_allowed(self, engine, messenger):
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        report = engine.distribute("CODE")
        assert report.sent_count == 1

    def test_distribute_empty_roster_ends_lobby(self, engine):
        open_squad(engine)
        engine.lock()
        report = engine.distribute("CODE")
        assert report.sent_count == 0
        assert engine.snapshot() is None

    def test_failed_delivery_lowers_count_only(self, store, make_messenger):
        """Test that a failing DM is skipped and the lobby still ends."""
        messenger = make_messenger(fail_for={"p2@test.com"}, raise_for={"p3@test.com"})
        engine = LobbyEngine(store, messenger, pacing_seconds=0)
        open_squad(engine)
        for n in (1, 2, 3, 4):
            engine.check_in(f"p{n}@test.com", f"Player{n}")

        report = engine.distribute("CODE")

        assert report.sent_count == 2
        assert report.failed == ["p2@test.com", "p3@test.com"]
        assert messenger.recipients == ["p1@test.com", "p4@test.com"]
        assert engine.snapshot() is None

    def test_distribute_without_lobby_raises_no_session(self, engine):
        with pytest.raises(NoSession):
            engine.distribute("CODE")

    def test_pacing_between_attempts(self, store, messenger):
        sleeps = []
        engine = LobbyEngine(store, messenger, pacing_seconds=0.1, sleep=sleeps.append)
        open_squad(engine)
        for n in range(3):
            engine.check_in(f"p{n}@test.com", f"Player{n}")

        engine.distribute("CODE")

        assert sleeps == [0.1, 0.1]


class TestEnd:
    """Tests for force-ending a lobby."""

    def test_end_clears_lobby(self, engine):
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")

        snapshot = engine.end()

        assert snapshot.state == LobbyState.ENDED
        assert snapshot.player_count == 1
        assert engine.snapshot() is None

    def test_end_without_lobby_raises_no_session(self, engine):
        with pytest.raises(NoSession):
            engine.end()

    def test_open_after_end_gets_new_session(self, engine):
        first = open_squad(engine)
        engine.end()
        second = engine.open("host@test.com", MatchFormat.DUO, "Oceania")
        assert second.session_id != first.session_id
        assert second.player_count == 0


class TestPresentationHandle:
    """Tests for linking the live lobby board."""

    def test_handle_appears_in_snapshot(self, engine):
        open_squad(engine)
        engine.set_presentation_handle(PresentationHandle("lobby@test.com", "msg-1"))

        snapshot = engine.snapshot()
        assert snapshot.presentation_channel == "lobby@test.com"
        assert snapshot.presentation_message_id == "msg-1"

    def test_handle_can_only_be_set_once(self, engine):
        open_squad(engine)
        engine.set_presentation_handle(PresentationHandle("lobby@test.com", "msg-1"))
        with pytest.raises(InvalidState):
            engine.set_presentation_handle(PresentationHandle("lobby@test.com", "msg-2"))

    def test_handle_without_lobby_raises_no_session(self, engine):
        with pytest.raises(NoSession):
            engine.set_presentation_handle(PresentationHandle("lobby@test.com", "msg-1"))


class TestListeners:
    """Tests for snapshot listeners."""

    def test_listener_sees_every_mutation(self, engine):
        seen = []
        engine.add_listener(seen.append)

        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        engine.lock()
        engine.distribute("CODE")

        states = [s.state if s else None for s in seen]
        assert states == [
            LobbyState.OPEN,
            LobbyState.OPEN,
            LobbyState.LOCKED,
            LobbyState.DISTRIBUTING,
            LobbyState.ENDED,
            None,
        ]

    def test_repeat_check_in_does_not_notify(self, engine):
        open_squad(engine)
        engine.check_in("p1@test.com", "PlayerOne")
        seen = []
        engine.add_listener(seen.append)

        engine.check_in("p1@test.com", "PlayerOne")

        assert seen == []

    def test_failing_listener_does_not_break_engine(self, engine):
        def broken(snapshot):
            raise RuntimeError("board down")

        engine.add_listener(broken)
        snapshot = open_squad(engine)
        assert engine.snapshot().session_id == snapshot.session_id


class TestScenarios:
    """End-to-end lobby lifecycles."""

    def test_squad_lobby_with_one_failed_delivery(self, make_messenger):
        messenger = make_messenger(fail_for={"p2@test.com"})
        engine = LobbyEngine(SessionStore(), messenger, pacing_seconds=0)
        seen = []
        engine.add_listener(seen.append)

        engine.open("host@test.com", MatchFormat.SQUAD, "EU")
        engine.check_in("p1@test.com", "PlayerOne")
        engine.check_in("p1@test.com", "PlayerOne")
        assert engine.snapshot().player_count == 1
        engine.check_in("p2@test.com", "PlayerTwo")
        engine.lock()
        report = engine.distribute("X9Y-22B")

        final = [s for s in seen if s is not None][-1]
        assert [e.player_id for e in final.roster] == ["p1@test.com", "p2@test.com"]
        assert final.code_distributed is True
        assert report.code == "X9Y-22B"
        assert report.sent_count == 1
        assert engine.snapshot() is None

    def test_full_lobby_distributes_to_all(self, engine, messenger):
        open_squad(engine)
        for i in range(MAX_PLAYERS):
            engine.check_in(f"p{i}@test.com", f"Player{i}")
        with pytest.raises(CapacityReached):
            engine.check_in("p100@test.com", "Player100")
        engine.lock()

        report = engine.distribute("FULL-LOBBY")

        assert report.sent_count == MAX_PLAYERS
        assert len(messenger.sent) == MAX_PLAYERS

    def test_end_immediately_then_reopen(self, engine):
        open_squad(engine)
        engine.end()
        with pytest.raises(NoSession):
            engine.check_in("p1@test.com", "PlayerOne")
        assert open_squad(engine).state == LobbyState.OPEN
