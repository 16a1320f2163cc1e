# Area: Lobby
"""
scrimflow._lobby.fanout — Match code fan-out
============================================

Delivers the match code to every player on a frozen roster, one
direct message each. A failed delivery is logged and skipped; it never
stops delivery to the rest and is never retried. A fixed pause between
attempts keeps the messaging channel under its rate limits.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from .enums import MatchFormat
from .session import CheckInRecord
from .._shared.protocol import build_envelope
from ..messenger import DirectMessenger

logger = logging.getLogger("scrimflow.lobby.fanout")

DEFAULT_PACING_SECONDS = 0.1

MATCH_CODE_MESSAGE_TYPE = "SCRIM_MATCH_CODE"


@dataclass
class DeliveryReport:
    """Outcome of one fan-out pass."""
    attempted: int = 0
    sent_count: int = 0
    failed: List[str] = field(default_factory=list)


def build_code_message(
    code: str,
    match_format: MatchFormat,
    region: str,
    session_id: str,
    sender_email: str = "",
) -> Dict[str, Any]:
    """Build the SCRIM_MATCH_CODE envelope sent to each player."""
    return build_envelope(
        message_type=MATCH_CODE_MESSAGE_TYPE,
        payload={
            "title": "Your Scrim Code",
            "description": f"Here is your matchmaking key for the {match_format.value} match.",
            "code": code,
            "format": match_format.value,
            "region": region,
            "notice": "DO NOT SHARE THIS CODE",
        },
        sender_email=sender_email,
        sender_role="SCRIMBOT",
        recipient_id="PLAYER",
        session_id=session_id,
    )


def fan_out_code(
    roster: Sequence[CheckInRecord],
    message: Dict[str, Any],
    messenger: DirectMessenger,
    pacing_seconds: float = DEFAULT_PACING_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> DeliveryReport:
    """
    Send ``message`` to every player in ``roster``.

    Args:
        roster: Frozen roster, iterated in order
        message: Envelope delivered to each player
        messenger: Point-to-point channel
        pacing_seconds: Pause between consecutive attempts
        sleep: Sleep function (injectable for tests)

    Returns:
        DeliveryReport with the success count and failed player ids
    """
    report = DeliveryReport()
    logger.info(f"Distributing code to {len(roster)} players...")

    for index, record in enumerate(roster):
        if index > 0 and pacing_seconds > 0:
            sleep(pacing_seconds)

        report.attempted += 1
        try:
            delivered = messenger.send_direct(record.player_id, message)
        except Exception as e:
            logger.warning(f"   x Failed to DM {record.epic_name}: {e}")
            report.failed.append(record.player_id)
            continue

        if delivered:
            report.sent_count += 1
            logger.info(f"   -> Sent to {record.epic_name}")
        else:
            logger.warning(f"   x Failed to DM {record.epic_name}")
            report.failed.append(record.player_id)

    logger.info(
        f"Distribution finished: {report.sent_count}/{report.attempted} delivered"
    )
    return report
