# Area: Commands
"""
scrimflow._commands.router — Command Router
===========================================

Routes incoming commands to their handlers. Before a handler runs the
router checks that the command exists, that admin commands come from
an admin, and that the sender is not on cooldown. Errors raised by a
handler are turned into error replies here, so one bad command never
reaches the poll loop.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from .cooldowns import CooldownTracker
from .handler_base import BaseCommandHandler, CommandContext, CommandReply
from ..errors import LobbyError, RegistryError

logger = logging.getLogger("scrimflow.commands.router")


@dataclass
class _Route:
    handler: BaseCommandHandler
    admin_only: bool = False
    cooldown_seconds: float = 0


class CommandRouter:
    """
    Routes commands to handlers.

    Usage:
        router = CommandRouter(admins=["admin@example.com"])
        router.register_handler("CHECKIN", checkin_handler, cooldown_seconds=3)
        reply = router.route(ctx)
    """

    def __init__(
        self,
        admins: Iterable[str] = (),
        cooldowns: Optional[CooldownTracker] = None,
    ):
        self._routes: Dict[str, _Route] = {}
        self.admins = {a.lower() for a in admins}
        self.cooldowns = cooldowns or CooldownTracker()

    def register_handler(
        self,
        command: str,
        handler: BaseCommandHandler,
        admin_only: bool = False,
        cooldown_seconds: float = 0,
    ) -> None:
        """
        Register a handler for a command.

        Args:
            command: The message_type to handle
            handler: The handler instance
            admin_only: Reject senders that are not admins
            cooldown_seconds: Minimum delay between two uses per sender
        """
        self._routes[command] = _Route(handler, admin_only, cooldown_seconds)
        logger.debug(f"Registered handler for {command}")

    def get_handler(self, command: str) -> Optional[BaseCommandHandler]:
        route = self._routes.get(command)
        return route.handler if route else None

    def is_admin(self, sender: str) -> bool:
        return sender.lower() in self.admins

    def route(self, ctx: CommandContext) -> CommandReply:
        """
        Route a command to its handler.

        Args:
            ctx: The incoming command

        Returns:
            The handler's reply, or an error reply
        """
        route = self._routes.get(ctx.command)
        if route is None:
            logger.warning(f"No handler for command: {ctx.command}")
            return _error(ctx, "UNKNOWN_COMMAND", f"Unknown command '{ctx.command}'.")

        if route.admin_only and not self.is_admin(ctx.sender):
            logger.warning(f"Rejected admin command {ctx.command} from {ctx.sender}")
            return _error(ctx, "NOT_AUTHORIZED", "This command is restricted to admins.")

        remaining = self.cooldowns.check(ctx.sender, ctx.command, route.cooldown_seconds)
        if remaining is not None:
            return _error(
                ctx,
                "COOLDOWN",
                f"Please wait {remaining}s before using {ctx.command} again.",
                retry_after_seconds=remaining,
            )

        logger.info(f"Routing {ctx.command} from {ctx.sender}")
        try:
            return route.handler.handle(ctx)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
                for err in e.errors()
            ]
            return _error(ctx, "INVALID_PAYLOAD", "Invalid payload.", problems=problems)
        except (LobbyError, RegistryError) as e:
            logger.info(f"{ctx.command} from {ctx.sender} failed: {e}")
            return _error(ctx, e.error_code, str(e))
        except Exception as e:
            logger.error(f"Handler error for {ctx.command}: {e}", exc_info=True)
            return _error(
                ctx,
                "INTERNAL_ERROR",
                "An unexpected error occurred while executing this command.",
            )


def _error(ctx: CommandContext, error_code: str, message: str, **data) -> CommandReply:
    return CommandReply(
        command=ctx.command,
        status="error",
        message=message,
        data=data,
        error_code=error_code,
    )
