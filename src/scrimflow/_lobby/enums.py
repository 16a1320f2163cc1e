# Area: Lobby
"""
scrimflow._lobby.enums — Lobby State Machine Enums
==================================================

Defines the lobby states, the events that move a lobby between them,
and the closed set of match formats.
"""

from enum import Enum


class LobbyState(Enum):
    """
    States of a scrim lobby.

    State transitions:
    OPEN -> LOCKED (on LOCK)
    OPEN -> DISTRIBUTING (on DISTRIBUTE)
    LOCKED -> DISTRIBUTING (on DISTRIBUTE)
    DISTRIBUTING -> ENDED (on FINISH)
    OPEN / LOCKED -> ENDED (on FORCE_END)

    A cleared store (no lobby at all) is the implicit ABSENT state and
    has no enum member.
    """
    OPEN = "OPEN"
    LOCKED = "LOCKED"
    DISTRIBUTING = "DISTRIBUTING"
    ENDED = "ENDED"


class LobbyEvent(Enum):
    """
    Events that trigger lobby state transitions.

    Events are triggered by:
    - LOCK: admin SCRIM_CLOSE
    - DISTRIBUTE: admin SCRIM_DISTRIBUTE, before the fan-out starts
    - FINISH: fan-out completed
    - FORCE_END: admin SCRIM_END
    """
    LOCK = "LOCK"
    DISTRIBUTE = "DISTRIBUTE"
    FINISH = "FINISH"
    FORCE_END = "FORCE_END"


class MatchFormat(Enum):
    """Team size of the scrim."""
    SOLO = "SOLO"
    DUO = "DUO"
    TRIO = "TRIO"
    SQUAD = "SQUAD"


class CheckInResult(Enum):
    """Successful outcomes of a check-in."""
    CHECKED_IN = "CHECKED_IN"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
