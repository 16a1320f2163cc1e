# Area: Lobby Tests
"""Tests for the lobby state machine table."""

import pytest
from scrimflow._lobby.enums import LobbyEvent, LobbyState
from scrimflow._lobby.state_machine import TRANSITIONS, can_transition, next_state, transition


class TestLobbyStateMachineBase:
    """Tests for basic state machine functionality."""

    def test_every_state_has_a_row(self):
        """Test that the table covers every lobby state."""
        assert set(TRANSITIONS) == set(LobbyState)

    def test_can_transition_returns_true_for_valid(self):
        """Test can_transition returns True for valid transitions."""
        assert can_transition(LobbyState.OPEN, LobbyEvent.LOCK) is True

    def test_can_transition_returns_false_for_invalid(self):
        """Test can_transition returns False for invalid transitions."""
        assert can_transition(LobbyState.LOCKED, LobbyEvent.LOCK) is False

    def test_transition_raises_on_invalid(self):
        """Test that invalid transition raises ValueError."""
        with pytest.raises(ValueError):
            transition(LobbyState.ENDED, LobbyEvent.DISTRIBUTE)

    def test_next_state_none_for_invalid(self):
        assert next_state(LobbyState.DISTRIBUTING, LobbyEvent.LOCK) is None


class TestLobbyStateMachineTransitions:
    """Tests for specific state transitions."""

    def test_lock_then_distribute_path(self):
        """Test OPEN -> LOCKED -> DISTRIBUTING -> ENDED."""
        state = LobbyState.OPEN
        state = transition(state, LobbyEvent.LOCK)
        assert state == LobbyState.LOCKED
        state = transition(state, LobbyEvent.DISTRIBUTE)
        assert state == LobbyState.DISTRIBUTING
        state = transition(state, LobbyEvent.FINISH)
        assert state == LobbyState.ENDED

    def test_distribute_straight_from_open(self):
        """Test that an open lobby may distribute without locking."""
        assert transition(LobbyState.OPEN, LobbyEvent.DISTRIBUTE) == LobbyState.DISTRIBUTING

    @pytest.mark.parametrize("state", [LobbyState.OPEN, LobbyState.LOCKED])
    def test_force_end_from_pre_distribution_states(self, state):
        assert transition(state, LobbyEvent.FORCE_END) == LobbyState.ENDED

    def test_no_backward_transitions(self):
        """Test that no event leads back to OPEN."""
        for row in TRANSITIONS.values():
            assert LobbyState.OPEN not in row.values()

    def test_ended_is_terminal(self):
        for event in LobbyEvent:
            assert can_transition(LobbyState.ENDED, event) is False
