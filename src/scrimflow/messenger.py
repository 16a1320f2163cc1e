# Area: Notifications
"""
scrimflow.messenger — Point-to-point delivery
=============================================

The match-code fan-out talks to players through a ``DirectMessenger``.
Subclass it to deliver over another channel; the bot ships an email
implementation that reuses its Gmail connection.

    class MyMessenger(DirectMessenger):
        def send_direct(self, player_id, message):
            ...
            return True
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from ._shared.protocol import build_subject

if TYPE_CHECKING:
    from ._shared.email_client import EmailClient

logger = logging.getLogger("scrimflow.messenger")


class DirectMessenger(ABC):
    """
    Abstract point-to-point message channel.

    One call is one delivery attempt. Return False (or raise) when the
    message could not be delivered; the caller decides what to do about it.
    """

    @abstractmethod
    def send_direct(self, player_id: str, message: Dict[str, Any]) -> bool:
        """
        Deliver one message to one player.

        Parameters
        ----------
        player_id : str
            Player identity (the player's email address for the email bot).
        message : dict
            Protocol envelope to deliver.

        Returns
        -------
        bool
            True if the message was handed to the channel.
        """


class EmailDirectMessenger(DirectMessenger):
    """Delivers envelopes as individual emails through ``EmailClient``."""

    def __init__(self, email_client: "EmailClient", role: str = "SCRIMBOT"):
        self.email_client = email_client
        self.role = role

    def send_direct(self, player_id: str, message: Dict[str, Any]) -> bool:
        subject = build_subject(
            role=self.role,
            email=self.email_client.address or "",
            message_type=message.get("message_type", "DIRECT"),
        )
        return self.email_client.send(player_id, subject, message)
