# Area: Commands
"""
scrimflow._commands.lobby_board — Live lobby board
==================================================

Posts the lobby announcement to the configured lobby channel (a
mailing-list address) and threads a status update to it after every
lobby change. The announcement's message id becomes the lobby's
presentation handle.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .status_view import render_lobby_status
from .._lobby.engine import LobbyEngine
from .._lobby.session import PresentationHandle
from .._lobby.snapshot import LobbySnapshot
from .._shared.protocol import build_envelope

logger = logging.getLogger("scrimflow.commands.lobby_board")

SendFn = Callable[[str, Dict[str, Any]], bool]


class LobbyBoard:
    """Announces lobbies and keeps their status thread current."""

    def __init__(
        self,
        engine: LobbyEngine,
        channel: str,
        send: SendFn,
        sender_email: str = "",
    ):
        self.engine = engine
        self.channel = channel
        self._send = send
        self.sender_email = sender_email

    @property
    def enabled(self) -> bool:
        return bool(self.channel)

    def announce(self, snapshot: LobbySnapshot) -> Optional[PresentationHandle]:
        """Post the opening announcement and link it to the lobby."""
        if not self.enabled:
            return None

        envelope = build_envelope(
            message_type="SCRIM_LOBBY_OPENED",
            payload=render_lobby_status(snapshot),
            sender_email=self.sender_email,
            sender_role="SCRIMBOT",
            recipient_id="LOBBY_CHANNEL",
            session_id=snapshot.session_id,
        )
        if not self._send(self.channel, envelope):
            logger.warning(f"[{snapshot.session_id}] Lobby announcement failed")
            return None

        handle = PresentationHandle(channel=self.channel, message_id=envelope["message_id"])
        self.engine.set_presentation_handle(handle)
        return handle

    def on_snapshot(self, snapshot: Optional[LobbySnapshot]) -> None:
        """Engine listener: publish a status update for linked lobbies."""
        if snapshot is None or snapshot.presentation_message_id is None:
            return

        envelope = build_envelope(
            message_type="SCRIM_STATUS_UPDATE",
            payload=render_lobby_status(snapshot),
            sender_email=self.sender_email,
            sender_role="SCRIMBOT",
            recipient_id="LOBBY_CHANNEL",
            correlation_id=snapshot.presentation_message_id,
            session_id=snapshot.session_id,
        )
        if not self._send(snapshot.presentation_channel or self.channel, envelope):
            logger.error(f"[{snapshot.session_id}] Failed to update live lobby board")
