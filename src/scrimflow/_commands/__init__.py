# Area: Commands
"""
Command layer: payload validation, routing, handlers and replies.
"""

from typing import Iterable, Optional

from .cooldowns import CooldownTracker
from .handler_base import BaseCommandHandler, CommandContext, CommandReply
from .handler_player import CheckInHandler, RegisterHandler, UnregisterHandler
from .handler_scrim import (
    Dispatcher,
    ScrimCloseHandler,
    ScrimDistributeHandler,
    ScrimEndHandler,
    ScrimOpenHandler,
    ScrimStatusHandler,
    run_inline,
)
from .handler_utility import LeaderboardHandler, PingHandler, measure_region_ping, ping_quality
from .lobby_board import LobbyBoard
from .response_builder import ResponseBuilder
from .router import CommandRouter
from .status_view import render_lobby_status
from .._lobby.engine import LobbyEngine
from .._registry.repo_players import PlayerRepository
from .._runner_config import ADMIN_COMMANDS, COMMAND_COOLDOWNS


def build_router(
    engine: LobbyEngine,
    players: PlayerRepository,
    admins: Iterable[str],
    board: Optional[LobbyBoard] = None,
    dispatcher: Dispatcher = run_inline,
    cooldowns: Optional[CooldownTracker] = None,
) -> CommandRouter:
    """Create a router with every scrimflow command registered."""
    router = CommandRouter(admins=admins, cooldowns=cooldowns)

    handlers = {
        "SCRIM_OPEN": ScrimOpenHandler(engine, board),
        "SCRIM_CLOSE": ScrimCloseHandler(engine),
        "SCRIM_DISTRIBUTE": ScrimDistributeHandler(engine, dispatcher),
        "SCRIM_END": ScrimEndHandler(engine),
        "SCRIM_STATUS": ScrimStatusHandler(engine),
        "CHECKIN": CheckInHandler(engine, players),
        "REGISTER": RegisterHandler(players),
        "UNREGISTER": UnregisterHandler(players),
        "PING": PingHandler(),
        "LEADERBOARD": LeaderboardHandler(players),
    }
    for command, handler in handlers.items():
        router.register_handler(
            command,
            handler,
            admin_only=command in ADMIN_COMMANDS,
            cooldown_seconds=COMMAND_COOLDOWNS.get(command, 0),
        )
    return router


__all__ = [
    "CooldownTracker",
    "BaseCommandHandler",
    "CommandContext",
    "CommandReply",
    "CheckInHandler",
    "RegisterHandler",
    "UnregisterHandler",
    "ScrimCloseHandler",
    "ScrimDistributeHandler",
    "ScrimEndHandler",
    "ScrimOpenHandler",
    "ScrimStatusHandler",
    "run_inline",
    "LeaderboardHandler",
    "PingHandler",
    "measure_region_ping",
    "ping_quality",
    "LobbyBoard",
    "ResponseBuilder",
    "CommandRouter",
    "render_lobby_status",
    "build_router",
]
