# Area: Lobby
"""
scrimflow._lobby.session — Lobby session state
==============================================

The single mutable lobby record. Only the engine mutates it, and only
while holding the session store lock.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .enums import LobbyState, MatchFormat

# Roster ceiling for every format
MAX_PLAYERS = 100


@dataclass(frozen=True)
class CheckInRecord:
    """One player's entry on the roster."""
    player_id: str
    epic_name: str
    checked_in_at: float


@dataclass(frozen=True)
class PresentationHandle:
    """Where the live lobby board was posted. Opaque to the engine."""
    channel: str
    message_id: str


@dataclass
class LobbySession:
    """
    Full state of the active scrim lobby.

    ``players`` keeps insertion order so the fan-out notifies players
    in check-in order.
    """
    session_id: str
    host_id: str
    format: MatchFormat
    region: str
    start_time: float
    state: LobbyState = LobbyState.OPEN
    players: Dict[str, CheckInRecord] = field(default_factory=dict)
    match_code: Optional[str] = None
    presentation_handle: Optional[PresentationHandle] = None

    def has_player(self, player_id: str) -> bool:
        return player_id in self.players

    def is_full(self, capacity: int = MAX_PLAYERS) -> bool:
        return len(self.players) >= capacity

    def frozen_roster(self) -> Tuple[CheckInRecord, ...]:
        """Copy of the roster in check-in order."""
        return tuple(self.players.values())
