# Area: Lobby Tests
"""Tests for lobby snapshots."""

import pytest
from pydantic import ValidationError

from scrimflow._lobby.enums import LobbyState, MatchFormat
from scrimflow._lobby.session import CheckInRecord, LobbySession, PresentationHandle
from scrimflow._lobby.snapshot import take_snapshot


@pytest.fixture
def session():
    s = LobbySession(
        session_id="scrim-1",
        host_id="host@test.com",
        format=MatchFormat.DUO,
        region="Oceania",
        start_time=100.0,
    )
    s.players["p1@test.com"] = CheckInRecord("p1@test.com", "PlayerOne", 101.0)
    return s


class TestTakeSnapshot:
    """Tests for take_snapshot()."""

    def test_copies_fields(self, session):
        snapshot = take_snapshot(session)

        assert snapshot.session_id == "scrim-1"
        assert snapshot.format == MatchFormat.DUO
        assert snapshot.state == LobbyState.OPEN
        assert snapshot.player_count == 1
        assert snapshot.has_player("p1@test.com")
        assert snapshot.is_open is True

    def test_snapshot_is_detached(self, session):
        snapshot = take_snapshot(session)
        session.players["p2@test.com"] = CheckInRecord("p2@test.com", "PlayerTwo", 102.0)
        session.state = LobbyState.LOCKED

        assert snapshot.player_count == 1
        assert snapshot.state == LobbyState.OPEN

    def test_snapshot_is_frozen(self, session):
        snapshot = take_snapshot(session)
        with pytest.raises(ValidationError):
            snapshot.state = LobbyState.ENDED

    def test_code_never_exposed(self, session):
        session.match_code = "SECRET"
        snapshot = take_snapshot(session)

        assert snapshot.code_distributed is True
        assert "SECRET" not in snapshot.model_dump_json()

    def test_presentation_handle(self, session):
        session.presentation_handle = PresentationHandle("lobby@test.com", "msg-9")
        snapshot = take_snapshot(session)
        assert snapshot.presentation_channel == "lobby@test.com"
        assert snapshot.presentation_message_id == "msg-9"
