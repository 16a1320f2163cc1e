# Area: Commands
"""
scrimflow._commands.handler_scrim — Admin lobby commands
========================================================

SCRIM_OPEN, SCRIM_CLOSE, SCRIM_DISTRIBUTE and SCRIM_END, plus the
public SCRIM_STATUS query.
"""

import logging
import threading
from typing import Callable, Optional

from .handler_base import BaseCommandHandler, CommandContext, CommandReply
from .lobby_board import LobbyBoard
from .schemas import DistributePayload, EmptyPayload, OpenLobbyPayload
from .status_view import render_lobby_status
from .._lobby.engine import LobbyEngine
from .._lobby.enums import LobbyEvent
from .._lobby.state_machine import can_transition
from ..errors import InvalidState, LobbyError, NoSession
from ..regions import region_name

logger = logging.getLogger("scrimflow.commands.scrim")

# Runs a job, possibly on another thread
Dispatcher = Callable[[Callable[[], None]], None]


def run_inline(job: Callable[[], None]) -> None:
    job()


class ScrimOpenHandler(BaseCommandHandler):
    """Start a new lobby and post its announcement."""

    def __init__(self, engine: LobbyEngine, board: Optional[LobbyBoard] = None):
        self.engine = engine
        self.board = board

    def handle(self, ctx: CommandContext) -> CommandReply:
        payload = self.parse(ctx, OpenLobbyPayload)
        snapshot = self.engine.open(
            ctx.sender, payload.format, region_name(payload.region)
        )
        if self.board is not None:
            self.board.announce(snapshot)
        return self.ok(
            ctx,
            f"Lobby opened: {snapshot.region} {snapshot.format.value}.",
            lobby=render_lobby_status(snapshot),
        )


class ScrimCloseHandler(BaseCommandHandler):
    """Lock the lobby (no more check-ins)."""

    def __init__(self, engine: LobbyEngine):
        self.engine = engine

    def handle(self, ctx: CommandContext) -> CommandReply:
        self.parse(ctx, EmptyPayload)
        snapshot = self.engine.lock()
        return self.ok(
            ctx,
            "🔒 Lobby locked. No new players can join.",
            lobby=render_lobby_status(snapshot),
        )


class ScrimDistributeHandler(BaseCommandHandler):
    """
    Send the match code to every checked-in player and end the lobby.

    The reply acknowledges the start; the outcome arrives as a
    follow-up once the fan-out is done.
    """

    def __init__(self, engine: LobbyEngine, dispatcher: Dispatcher = run_inline):
        self.engine = engine
        self.dispatcher = dispatcher
        # Session ids with a queued or running distribution
        self._pending = set()
        self._pending_lock = threading.Lock()

    def handle(self, ctx: CommandContext) -> CommandReply:
        payload = self.parse(ctx, DistributePayload)

        snapshot = self.engine.snapshot()
        if snapshot is None:
            raise NoSession("distribute")
        if not can_transition(snapshot.state, LobbyEvent.DISTRIBUTE):
            raise InvalidState("distribute", snapshot.state.value, snapshot.session_id)

        session_id = snapshot.session_id
        with self._pending_lock:
            if session_id in self._pending:
                raise InvalidState("distribute", "DISTRIBUTING", session_id)
            self._pending.add(session_id)

        self.dispatcher(lambda: self._distribute(ctx, payload.code, session_id))
        return self.ok(
            ctx,
            f"🚀 Starting distribution of code `{payload.code}` "
            f"to {snapshot.player_count} players...",
            session_id=snapshot.session_id,
            roster_size=snapshot.player_count,
        )

    def _release(self, session_id: str) -> None:
        with self._pending_lock:
            self._pending.discard(session_id)

    def _distribute(self, ctx: CommandContext, code: str, session_id: str) -> None:
        try:
            report = self.engine.distribute(code)
        except LobbyError as e:
            logger.warning(f"Distribution did not start: {e}")
            ctx.followup(self.error(ctx, e.error_code, str(e)))
            return
        finally:
            self._release(session_id)

        if report.completed:
            message = (
                f"✅ Distribution complete. DMs sent to {report.sent_count} "
                f"players. Lobby ended."
            )
        else:
            message = (
                f"Distribution finished after the lobby was force-ended. "
                f"DMs sent to {report.sent_count} players."
            )
        ctx.followup(self.ok(
            ctx,
            message,
            session_id=report.session_id,
            roster_size=report.roster_size,
            sent_count=report.sent_count,
            failed=report.failed,
        ))


class ScrimEndHandler(BaseCommandHandler):
    """Force-end the current lobby."""

    def __init__(self, engine: LobbyEngine):
        self.engine = engine

    def handle(self, ctx: CommandContext) -> CommandReply:
        self.parse(ctx, EmptyPayload)
        snapshot = self.engine.end()
        return self.ok(
            ctx,
            "🛑 Session force-ended.",
            session_id=snapshot.session_id,
            player_count=snapshot.player_count,
        )


class ScrimStatusHandler(BaseCommandHandler):
    """Report the current lobby."""

    def __init__(self, engine: LobbyEngine):
        self.engine = engine

    def handle(self, ctx: CommandContext) -> CommandReply:
        status = render_lobby_status(self.engine.snapshot())
        return self.ok(ctx, status["message"], lobby=status)
