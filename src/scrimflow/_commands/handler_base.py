# Area: Commands
"""
scrimflow._commands.handler_base — Base Command Handler
=======================================================

Abstract base class for all command handlers, plus the context and
reply objects passed between the router and the handlers.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from .schemas import CommandPayload

logger = logging.getLogger("scrimflow.commands.handler")

P = TypeVar("P", bound=CommandPayload)


@dataclass
class CommandReply:
    """What a handler wants sent back to the sender."""
    command: str
    status: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"status": self.status, "message": self.message}
        payload.update(self.data)
        if self.error_code is not None:
            payload["error_code"] = self.error_code
        return payload


def _discard(reply: CommandReply) -> None:
    logger.debug(f"Dropped follow-up for {reply.command}")


@dataclass
class CommandContext:
    """
    One incoming command.

    ``followup`` delivers additional replies after the handler returned
    (used by distribution, which finishes on a worker thread).
    """
    command: str
    sender: str
    payload: Dict[str, Any] = field(default_factory=dict)
    message_id: Optional[str] = None
    followup: Callable[[CommandReply], None] = _discard


class BaseCommandHandler(ABC):
    """
    Abstract base class for command handlers.

    Subclasses implement handle() and return a CommandReply. Lobby and
    registry errors may be raised; the router turns them into error
    replies.
    """

    @abstractmethod
    def handle(self, ctx: CommandContext) -> CommandReply:
        """
        Handle one command.

        Args:
            ctx: The incoming command

        Returns:
            Reply to send to the sender
        """

    def parse(self, ctx: CommandContext, model: Type[P]) -> P:
        """Validate the payload; pydantic's ValidationError propagates."""
        return model.model_validate(ctx.payload or {})

    def ok(self, ctx: CommandContext, message: str, **data: Any) -> CommandReply:
        return CommandReply(command=ctx.command, status="ok", message=message, data=data)

    def error(
        self, ctx: CommandContext, error_code: str, message: str, **data: Any
    ) -> CommandReply:
        return CommandReply(
            command=ctx.command,
            status="error",
            message=message,
            data=data,
            error_code=error_code,
        )
