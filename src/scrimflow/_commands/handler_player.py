# Area: Commands
"""
scrimflow._commands.handler_player — Player commands
====================================================

CHECKIN, REGISTER and UNREGISTER.
"""

import logging

from .handler_base import BaseCommandHandler, CommandContext, CommandReply
from .schemas import EmptyPayload, RegisterPayload, UnregisterPayload
from .._lobby.engine import LobbyEngine
from .._lobby.enums import CheckInResult
from .._registry.repo_players import PlayerRepository
from ..errors import EpicNameTaken, NoSession, NotRegistered
from ..regions import COMPETITIVE_REGIONS, region_name

logger = logging.getLogger("scrimflow.commands.player")


class CheckInHandler(BaseCommandHandler):
    """Join the currently open lobby with the registered Epic name."""

    def __init__(self, engine: LobbyEngine, players: PlayerRepository):
        self.engine = engine
        self.players = players

    def handle(self, ctx: CommandContext) -> CommandReply:
        self.parse(ctx, EmptyPayload)

        # 1. Is there a lobby?
        if self.engine.snapshot() is None:
            raise NoSession("check_in")

        # 2. Is the player registered?
        player = self.players.get_player(ctx.sender)
        if player is None:
            raise NotRegistered(ctx.sender)

        # 3. Attempt check-in
        result = self.engine.check_in(ctx.sender, player["epic_name"])
        if result == CheckInResult.ALREADY_CHECKED_IN:
            return self.ok(
                ctx,
                "You are already checked in.",
                result=result.value,
            )
        return self.ok(
            ctx,
            f"✅ {region_name(player['region'])} check-in confirmed! You are in the queue.",
            result=result.value,
            epic_name=player["epic_name"],
        )


class RegisterHandler(BaseCommandHandler):
    """Link an Epic Games name and region to the sender."""

    def __init__(self, players: PlayerRepository):
        self.players = players

    def handle(self, ctx: CommandContext) -> CommandReply:
        payload = self.parse(ctx, RegisterPayload)

        existing = self.players.get_player_by_epic_name(payload.epic_name)
        if existing and existing["player_id"] != ctx.sender:
            raise EpicNameTaken(payload.epic_name)

        is_new, record = self.players.register_player(
            ctx.sender, payload.epic_name, payload.region
        )
        region = COMPETITIVE_REGIONS[payload.region]
        logger.info(f"{'Registered' if is_new else 'Updated'} {ctx.sender} as {payload.epic_name}")

        if is_new:
            message = (
                f"🎉 Registration complete! Welcome to the competitive scene, "
                f"{payload.epic_name}."
            )
        else:
            message = "✅ Your profile has been updated successfully."
        return self.ok(
            ctx,
            message,
            is_new=is_new,
            epic_name=record["epic_name"],
            region=payload.region,
            region_name=region["name"],
            earnings=round(float(record["earnings"]), 2),
        )


class UnregisterHandler(BaseCommandHandler):
    """Unlink the sender's Epic name. Needs ``confirm: true``."""

    def __init__(self, players: PlayerRepository):
        self.players = players

    def handle(self, ctx: CommandContext) -> CommandReply:
        payload = self.parse(ctx, UnregisterPayload)

        player = self.players.get_player(ctx.sender)
        if player is None:
            raise NotRegistered(ctx.sender)

        if not payload.confirm:
            return self.ok(
                ctx,
                f"⚠️ Are you sure you want to unlink {player['epic_name']}? "
                f"You will lose your leaderboard spot and need to re-register "
                f"to play. Send UNREGISTER again with confirm=true.",
                confirmed=False,
                epic_name=player["epic_name"],
            )

        self.players.delete_player(ctx.sender)
        logger.info(f"Unregistered {ctx.sender} ({player['epic_name']})")
        return self.ok(
            ctx,
            f"🗑️ Successfully unlinked {player['epic_name']}.",
            confirmed=True,
            epic_name=player["epic_name"],
        )
