# Area: Lobby
"""
scrimflow._lobby.snapshot — Immutable lobby snapshots
=====================================================

Read-only views of the lobby handed to the presentation layer and to
snapshot listeners. The match code itself never leaves the engine in
a snapshot; only the ``code_distributed`` flag does.
"""

from __future__ import annotations
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .enums import LobbyState, MatchFormat
from .session import LobbySession, MAX_PLAYERS


class RosterEntry(BaseModel):
    """Frozen copy of a check-in record."""
    model_config = ConfigDict(frozen=True)

    player_id: str
    epic_name: str
    checked_in_at: float


class LobbySnapshot(BaseModel):
    """Frozen copy of the lobby at one point in time."""
    model_config = ConfigDict(frozen=True)

    session_id: str
    host_id: str
    format: MatchFormat
    region: str
    state: LobbyState
    start_time: float
    roster: Tuple[RosterEntry, ...] = ()
    capacity: int = MAX_PLAYERS
    code_distributed: bool = False
    presentation_channel: Optional[str] = None
    presentation_message_id: Optional[str] = None

    @property
    def player_count(self) -> int:
        return len(self.roster)

    @property
    def is_open(self) -> bool:
        return self.state == LobbyState.OPEN

    def has_player(self, player_id: str) -> bool:
        return any(entry.player_id == player_id for entry in self.roster)


def take_snapshot(session: LobbySession, capacity: int = MAX_PLAYERS) -> LobbySnapshot:
    """Build a snapshot. Call with the session store lock held."""
    handle = session.presentation_handle
    return LobbySnapshot(
        session_id=session.session_id,
        host_id=session.host_id,
        format=session.format,
        region=session.region,
        state=session.state,
        start_time=session.start_time,
        roster=tuple(
            RosterEntry(
                player_id=record.player_id,
                epic_name=record.epic_name,
                checked_in_at=record.checked_in_at,
            )
            for record in session.players.values()
        ),
        capacity=capacity,
        code_distributed=session.match_code is not None,
        presentation_channel=handle.channel if handle else None,
        presentation_message_id=handle.message_id if handle else None,
    )
