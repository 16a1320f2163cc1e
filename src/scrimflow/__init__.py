"""
scrimflow — Competitive Scrim Lobby Bot
=======================================

Runs one scrim lobby at a time over email: an admin opens a lobby,
registered players check in, the admin locks it and distributes the
match code to every checked-in player, and the lobby ends.

Quick Start:
    from scrimflow import ScrimRunner
    runner = ScrimRunner(config={"admin_emails": ["host@example.com"]})
    runner.run()

Using the lobby core directly:
    from scrimflow import LobbyEngine, SessionStore, MatchFormat
    engine = LobbyEngine(SessionStore(), messenger=MyMessenger())
    engine.open("host@example.com", MatchFormat.SQUAD, "Europe")
    engine.check_in("p1@example.com", "PlayerOne")
    engine.lock()
    report = engine.distribute("X9Y-22B")
"""

from ._lobby import (
    MAX_PLAYERS,
    CheckInResult,
    DistributionReport,
    LobbyEngine,
    LobbySnapshot,
    LobbyState,
    MatchFormat,
    SessionStore,
)
from .errors import (
    ScrimFlowError,
    LobbyError,
    AlreadyActive,
    NoSession,
    InvalidState,
    CapacityReached,
    Rejected,
    RegistryError,
    NotRegistered,
    EpicNameTaken,
    ConfigurationError,
)
from .messenger import DirectMessenger, EmailDirectMessenger
from .runner import ScrimRunner

__version__ = "1.0.0"

__all__ = [
    "MAX_PLAYERS",
    "CheckInResult",
    "DistributionReport",
    "LobbyEngine",
    "LobbySnapshot",
    "LobbyState",
    "MatchFormat",
    "SessionStore",
    "ScrimFlowError",
    "LobbyError",
    "AlreadyActive",
    "NoSession",
    "InvalidState",
    "CapacityReached",
    "Rejected",
    "RegistryError",
    "NotRegistered",
    "EpicNameTaken",
    "ConfigurationError",
    "DirectMessenger",
    "EmailDirectMessenger",
    "ScrimRunner",
]
