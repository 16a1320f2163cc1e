# Area: Shared
"""
scrimflow._shared.protocol — Protocol helpers for message formatting
====================================================================

Envelope and subject-line helpers for every JSON message the bot
sends or accepts.

Envelope layout:
    {
      "protocol": "scrimflow.v1",
      "message_type": "CHECKIN_RESPONSE",
      "message_id": "...",
      "timestamp": "...",
      "sender": {"email": ..., "role": ...},
      "recipient_id": "...",
      "payload": {...},
      "correlation_id": "...",   # optional, links a reply to its request
      "session_id": "..."        # optional, lobby context
    }
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SCRIM_PROTOCOL = "scrimflow.v1"


def generate_tx_id(prefix: str = "tx") -> str:
    """Generate unique transaction ID.

    Format: prefix-YYYYMMDD-XXXXXX
    """
    date_part = datetime.now().strftime("%Y%m%d")
    unique_part = uuid.uuid4().hex[:6]
    return f"{prefix}-{date_part}-{unique_part}"


def generate_message_id() -> str:
    """Generate unique message ID."""
    return str(uuid.uuid4())


def current_timestamp() -> str:
    """Generate ISO 8601 timestamp with timezone."""
    return datetime.now(timezone.utc).isoformat()


def build_subject(
    role: str,
    email: str,
    message_type: str,
    tx_id: Optional[str] = None,
    protocol: str = SCRIM_PROTOCOL,
) -> str:
    """Build protocol subject line.

    Format: protocol::ROLE::email::tx-id::MESSAGETYPE

    Args:
        role: Sender role (SCRIMBOT, ADMIN, PLAYER)
        email: Sender's email address
        message_type: Message type (underscores removed for subject)
        tx_id: Transaction ID (auto-generated if not provided)
        protocol: Protocol version

    Returns:
        Formatted subject line
    """
    if tx_id is None:
        tx_id = generate_tx_id()

    msg_type_formatted = message_type.replace("_", "")

    return f"{protocol}::{role}::{email}::{tx_id}::{msg_type_formatted}"


def build_envelope(
    message_type: str,
    payload: Dict[str, Any],
    sender_email: str,
    sender_role: str,
    recipient_id: str = "PLAYER",
    correlation_id: Optional[str] = None,
    session_id: Optional[str] = None,
    message_id: Optional[str] = None,
    protocol: str = SCRIM_PROTOCOL,
) -> Dict[str, Any]:
    """Build a message envelope.

    Args:
        message_type: Message type (e.g., SCRIM_MATCH_CODE)
        payload: Message-specific payload data
        sender_email: Sender's email
        sender_role: Sender role
        recipient_id: Recipient identifier
        correlation_id: Links to original request (for responses)
        session_id: Lobby context
        message_id: Message ID (auto-generated if not provided)
        protocol: Protocol version

    Returns:
        Complete envelope dict
    """
    if message_id is None:
        message_id = generate_message_id()

    envelope = {
        "protocol": protocol,
        "message_type": message_type,
        "message_id": message_id,
        "timestamp": current_timestamp(),
        "sender": {
            "email": sender_email,
            "role": sender_role,
        },
        "recipient_id": recipient_id,
        "payload": payload,
    }

    # Add optional context fields (use `is not None` to preserve falsy values)
    if correlation_id is not None:
        envelope["correlation_id"] = correlation_id
    if session_id is not None:
        envelope["session_id"] = session_id

    return envelope


def parse_sender(from_header: str) -> str:
    """Extract the bare lowercase address from a From header.

    "Player One <P1@Example.com>" -> "p1@example.com"
    """
    value = from_header.strip()
    if "<" in value and value.endswith(">"):
        value = value[value.rindex("<") + 1:-1]
    return value.strip().lower()
