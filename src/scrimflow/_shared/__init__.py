# Area: Shared
"""
Shared utilities used by the lobby core and the command layer.

This package contains:
- Email client for Gmail communication
- Logging configuration
- Protocol helpers for message formatting
"""

from .email_client import EmailClient
from .logging_config import setup_logging, log_and_terminate
from .protocol import (
    SCRIM_PROTOCOL,
    build_envelope,
    build_subject,
    generate_tx_id,
    generate_message_id,
    current_timestamp,
    parse_sender,
)

__all__ = [
    "EmailClient",
    "setup_logging",
    "log_and_terminate",
    "SCRIM_PROTOCOL",
    "build_envelope",
    "build_subject",
    "generate_tx_id",
    "generate_message_id",
    "current_timestamp",
    "parse_sender",
]
