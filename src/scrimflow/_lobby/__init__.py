# Area: Lobby
"""
Lobby core: session store, state machine, engine and code fan-out.
"""

from .enums import CheckInResult, LobbyEvent, LobbyState, MatchFormat
from .engine import DistributionReport, LobbyEngine
from .fanout import DeliveryReport, build_code_message, fan_out_code
from .session import MAX_PLAYERS, CheckInRecord, LobbySession, PresentationHandle
from .snapshot import LobbySnapshot, RosterEntry, take_snapshot
from .store import SessionStore

__all__ = [
    "CheckInResult",
    "LobbyEvent",
    "LobbyState",
    "MatchFormat",
    "DistributionReport",
    "LobbyEngine",
    "DeliveryReport",
    "build_code_message",
    "fan_out_code",
    "MAX_PLAYERS",
    "CheckInRecord",
    "LobbySession",
    "PresentationHandle",
    "LobbySnapshot",
    "RosterEntry",
    "take_snapshot",
    "SessionStore",
]
