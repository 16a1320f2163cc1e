# Area: Commands Tests
"""Tests for command payload models."""

import pytest
from pydantic import ValidationError

from scrimflow._commands.schemas import (
    DistributePayload,
    LeaderboardPayload,
    OpenLobbyPayload,
    PingPayload,
    RegisterPayload,
    UnregisterPayload,
)
from scrimflow._lobby.enums import MatchFormat


class TestOpenLobbyPayload:

    def test_format_case_insensitive(self):
        payload = OpenLobbyPayload.model_validate({"format": "squad", "region": "EU"})
        assert payload.format == MatchFormat.SQUAD

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            OpenLobbyPayload.model_validate({"format": "QUINTET", "region": "EU"})

    def test_unknown_region_rejected(self):
        with pytest.raises(ValidationError) as exc:
            OpenLobbyPayload.model_validate({"format": "SOLO", "region": "MARS"})
        assert "unknown region" in str(exc.value)


class TestRegisterPayload:

    def test_valid(self):
        payload = RegisterPayload.model_validate({"epic_name": "  Player.One_2 ", "region": "NA-East"})
        assert payload.epic_name == "Player.One_2"

    @pytest.mark.parametrize("name", ["ab", "x" * 33, "bad$name", "emoji🙂"])
    def test_invalid_epic_names(self, name):
        with pytest.raises(ValidationError):
            RegisterPayload.model_validate({"epic_name": name, "region": "EU"})

    def test_region_required(self):
        with pytest.raises(ValidationError):
            RegisterPayload.model_validate({"epic_name": "PlayerOne"})


class TestOtherPayloads:

    def test_distribute_code_required(self):
        with pytest.raises(ValidationError):
            DistributePayload.model_validate({})

    def test_unregister_defaults_to_unconfirmed(self):
        assert UnregisterPayload.model_validate({}).confirm is False

    def test_ping_region_optional(self):
        assert PingPayload.model_validate({}).region is None
        with pytest.raises(ValidationError):
            PingPayload.model_validate({"region": "MARS"})

    def test_leaderboard_limit_bounds(self):
        assert LeaderboardPayload.model_validate({}).limit == 10
        with pytest.raises(ValidationError):
            LeaderboardPayload.model_validate({"limit": 0})
        with pytest.raises(ValidationError):
            LeaderboardPayload.model_validate({"limit": 51})

    def test_extra_keys_ignored(self):
        payload = DistributePayload.model_validate({"code": "X", "note": "hi"})
        assert payload.code == "X"
