# Area: Commands
"""
scrimflow._commands.response_builder — Command Response Builder
===============================================================

Wraps command replies in protocol envelopes. Every reply is a
``<COMMAND>_RESPONSE`` whose ``correlation_id`` points at the request.
"""

from typing import Any, Dict, Optional

from .handler_base import CommandContext, CommandReply
from .._shared.protocol import build_envelope


class ResponseBuilder:
    """
    Builds reply envelopes for command senders.

    All replies follow the scrimflow protocol format with message_type
    and payload fields.
    """

    def __init__(self, sender_email: str, sender_role: str = "SCRIMBOT"):
        self.sender_email = sender_email
        self.sender_role = sender_role

    def build_reply(
        self, ctx: CommandContext, reply: CommandReply, session_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the envelope answering ``ctx``.

        Args:
            ctx: The command being answered
            reply: The handler's (or router's) reply
            session_id: Lobby context, if any

        Returns:
            Complete envelope dict
        """
        return build_envelope(
            message_type=f"{reply.command}_RESPONSE",
            payload=reply.to_payload(),
            sender_email=self.sender_email,
            sender_role=self.sender_role,
            recipient_id=ctx.sender,
            correlation_id=ctx.message_id,
            session_id=session_id or reply.data.get("session_id"),
        )
