# Area: Commands
"""
scrimflow._commands.status_view — Live lobby status rendering
=============================================================

Turns a lobby snapshot into the status payload used by SCRIM_STATUS
replies and by the live lobby board.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .._lobby.enums import LobbyState
from .._lobby.snapshot import LobbySnapshot

NO_LOBBY_MESSAGE = "No active lobby."


def render_lobby_status(snapshot: Optional[LobbySnapshot]) -> Dict[str, Any]:
    """Render the status payload for a snapshot (or for no lobby)."""
    if snapshot is None:
        return {"active": False, "message": NO_LOBBY_MESSAGE}

    marker = "🟢" if snapshot.state == LobbyState.OPEN else "🔴"
    match_code = "DISTRIBUTED" if snapshot.code_distributed else "Waiting for host..."
    started = datetime.fromtimestamp(snapshot.start_time, tz=timezone.utc).isoformat()

    return {
        "active": True,
        "session_id": snapshot.session_id,
        "title": f"{marker} {snapshot.region} {snapshot.format.value} Scrim Lobby",
        "host": snapshot.host_id,
        "state": snapshot.state.value,
        "match_code": match_code,
        "players": f"{snapshot.player_count} / {snapshot.capacity}",
        "player_count": snapshot.player_count,
        "capacity": snapshot.capacity,
        "format": snapshot.format.value,
        "region": snapshot.region,
        "started_at": started,
        "how_to_join": "Send a CHECKIN command to enter this match.",
        "message": (
            f"{snapshot.region} {snapshot.format.value} lobby is {snapshot.state.value} "
            f"({snapshot.player_count} / {snapshot.capacity} players)"
        ),
    }
