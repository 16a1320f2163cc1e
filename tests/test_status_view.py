# Area: Commands Tests
"""Tests for lobby status rendering."""

from scrimflow._commands.status_view import render_lobby_status
from scrimflow._lobby.enums import MatchFormat


class TestRenderLobbyStatus:

    def test_no_lobby(self):
        status = render_lobby_status(None)
        assert status == {"active": False, "message": "No active lobby."}

    def test_open_lobby(self, engine):
        engine.open("host@test.com", MatchFormat.SQUAD, "Europe")
        engine.check_in("p1@test.com", "PlayerOne")

        status = render_lobby_status(engine.snapshot())

        assert status["active"] is True
        assert status["title"] == "🟢 Europe SQUAD Scrim Lobby"
        assert status["host"] == "host@test.com"
        assert status["state"] == "OPEN"
        assert status["match_code"] == "Waiting for host..."
        assert status["players"] == "1 / 100"
        assert status["started_at"].endswith("+00:00")

    def test_locked_lobby_marked_red(self, engine):
        engine.open("host@test.com", MatchFormat.DUO, "Brazil")
        engine.lock()
        status = render_lobby_status(engine.snapshot())
        assert status["title"].startswith("🔴")
        assert status["state"] == "LOCKED"

    def test_distributed_code_hidden(self, engine):
        seen = []
        engine.add_listener(seen.append)
        engine.open("host@test.com", MatchFormat.DUO, "Brazil")
        engine.distribute("SECRET")

        distributing = [s for s in seen if s is not None][-2]
        status = render_lobby_status(distributing)
        assert status["match_code"] == "DISTRIBUTED"
        assert "SECRET" not in str(status)
