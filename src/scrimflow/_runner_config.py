# Area: Shared
"""
scrimflow._runner_config — Runner Configuration
===============================================

Configuration validation and constants for ScrimRunner.
"""

import logging
from typing import Any, Dict

from .errors import ConfigurationError

logger = logging.getLogger("scrimflow")

# Admin-only commands
ADMIN_COMMANDS = {
    "SCRIM_OPEN",
    "SCRIM_CLOSE",
    "SCRIM_DISTRIBUTE",
    "SCRIM_END",
}

# Commands anyone may send
PLAYER_COMMANDS = {
    "SCRIM_STATUS",
    "CHECKIN",
    "REGISTER",
    "UNREGISTER",
    "PING",
    "LEADERBOARD",
}

INCOMING_MESSAGE_TYPES = ADMIN_COMMANDS | PLAYER_COMMANDS

# Seconds a sender must wait between two uses of a command
COMMAND_COOLDOWNS = {
    "CHECKIN": 3,
    "REGISTER": 10,
    "UNREGISTER": 30,
    "PING": 5,
}

DEFAULTS: Dict[str, Any] = {
    "poll_interval_seconds": 5,
    "dm_pacing_seconds": 0.1,
    "database_path": "scrimflow.db",
    "log_file": "scrimflow.log",
    "lobby_channel_email": "",
    "credentials_path": "",
    "token_path": "",
}


def validate_config(config: dict) -> None:
    """
    Validate required configuration keys.

    Args:
        config: Configuration dict

    Raises:
        ConfigurationError: If required keys are missing or malformed
    """
    problems = []
    admins = config.get("admin_emails")
    if not admins:
        problems.append("admin_emails: at least one admin address is required")
    elif not isinstance(admins, (list, tuple, set)):
        problems.append("admin_emails: must be a list of addresses")

    for key in ("poll_interval_seconds", "dm_pacing_seconds"):
        value = config.get(key, DEFAULTS[key])
        if not isinstance(value, (int, float)) or value < 0:
            problems.append(f"{key}: must be a non-negative number")

    if problems:
        raise ConfigurationError(problems)


def with_defaults(config: dict) -> Dict[str, Any]:
    """Return a copy of ``config`` with defaults filled in."""
    merged = dict(DEFAULTS)
    merged.update(config)
    merged["admin_emails"] = [
        a.strip().lower() for a in merged.get("admin_emails") or [] if a.strip()
    ]
    return merged
