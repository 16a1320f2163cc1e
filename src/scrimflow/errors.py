"""
scrimflow.errors — Custom exception classes
============================================

Defines the exception hierarchy for lobby, registry and configuration
errors. Lobby and registry errors carry an ``error_code`` that the
command layer copies into its error replies.
"""

from __future__ import annotations
from typing import List, Optional


class ScrimFlowError(Exception):
    """Base exception for all ScrimFlow package errors."""
    pass


# ============ Lobby errors ============

class LobbyError(ScrimFlowError):
    """Base class for lobby state machine failures."""

    error_code = "LOBBY_ERROR"

    def __init__(self, message: str, session_id: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message)


class AlreadyActive(LobbyError):
    """Open was called while a lobby already exists."""

    error_code = "ALREADY_ACTIVE"

    def __init__(self, session_id: str):
        super().__init__(
            f"Lobby {session_id} is already active. End it first.",
            session_id=session_id,
        )


class NoSession(LobbyError):
    """An operation other than Open was called with no lobby."""

    error_code = "NO_SESSION"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"No active lobby for {operation}")


class InvalidState(LobbyError):
    """The lobby's current state forbids the operation."""

    error_code = "INVALID_STATE"

    def __init__(self, operation: str, state: str, session_id: Optional[str] = None):
        self.operation = operation
        self.state = state
        super().__init__(
            f"Cannot {operation} while lobby is {state}",
            session_id=session_id,
        )


class CapacityReached(LobbyError):
    """Check-in attempted on a full roster."""

    error_code = "CAPACITY_REACHED"

    def __init__(self, capacity: int, session_id: Optional[str] = None):
        self.capacity = capacity
        super().__init__(
            f"Lobby is full ({capacity} players)",
            session_id=session_id,
        )


class Rejected(LobbyError):
    """Check-in attempted while the lobby is not OPEN."""

    error_code = "REJECTED"

    def __init__(self, state: str, session_id: Optional[str] = None):
        self.state = state
        super().__init__(
            f"Check-in closed: lobby is {state}",
            session_id=session_id,
        )


# ============ Registry errors ============

class RegistryError(ScrimFlowError):
    """Base class for player registry failures."""

    error_code = "REGISTRY_ERROR"


class NotRegistered(RegistryError):
    """The player has no registry record."""

    error_code = "NOT_REGISTERED"

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not registered")


class EpicNameTaken(RegistryError):
    """The Epic name is linked to another player."""

    error_code = "EPIC_NAME_TAKEN"

    def __init__(self, epic_name: str):
        self.epic_name = epic_name
        super().__init__(f"Epic name '{epic_name}' is already linked to another account")


# ============ Configuration errors ============

class ConfigurationError(ScrimFlowError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(f"Invalid configuration: {problems}")

    def format_error_log(self) -> str:
        from datetime import datetime, timezone

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        lines = [
            "",
            "=" * 64,
            " CONFIGURATION ERROR — PROCESS TERMINATED",
            "=" * 64,
            f" Timestamp:    {timestamp}",
            "",
            " ── PROBLEMS " + "─" * 51,
        ]
        for problem in self.problems:
            lines.append(f" • {problem}")

        lines.append("")
        lines.append(" To fix this:")
        lines.append(" 1. Run setup_config.py (or edit config.json / .env)")
        lines.append(" 2. Fill in the missing values")
        lines.append(" 3. Restart the bot")
        lines.append("")
        lines.append("=" * 64)
        lines.append("")

        return "\n".join(lines)
