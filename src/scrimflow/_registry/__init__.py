# Area: Registry
"""
Player registry: SQLite-backed profile records.
"""

from .database import init_database, get_connection, BaseRepository
from .repo_players import PlayerRepository

__all__ = [
    "init_database",
    "get_connection",
    "BaseRepository",
    "PlayerRepository",
]
