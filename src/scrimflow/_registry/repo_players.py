# Area: Registry
"""
scrimflow._registry.repo_players — Players Repository
=====================================================

Repository for the players table: registration, lookups, typed
deletion, earnings and leaderboards.
"""

from typing import Any, Dict, List, Optional, Tuple
from .database import BaseRepository


class PlayerRepository(BaseRepository):
    """
    Repository for players table.

    A player is keyed by their identity (email address); the Epic name
    is what the lobby roster shows.
    """

    def register_player(
        self, player_id: str, epic_name: str, region: str
    ) -> Tuple[bool, Dict[str, Any]]:
        """
        Register a new player or update an existing one.

        Earnings survive re-registration.

        Args:
            player_id: Player identity
            epic_name: Epic Games display name
            region: Region key (e.g. "EU")

        Returns:
            (is_new, player record)
        """
        existing = self.get_player(player_id)
        query = """
            INSERT INTO players (player_id, epic_name, region)
            VALUES (?, ?, ?)
            ON CONFLICT(player_id) DO UPDATE SET
                epic_name = excluded.epic_name,
                region = excluded.region,
                registered_at = CURRENT_TIMESTAMP
        """
        self._execute(query, (player_id, epic_name, region))
        return existing is None, self.get_player(player_id)

    def get_player(self, player_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a player by identity.

        Args:
            player_id: Player identity to look up

        Returns:
            Player record dict or None if not found
        """
        query = "SELECT * FROM players WHERE player_id = ?"
        return self._execute_one(query, (player_id,))

    def get_player_by_epic_name(self, epic_name: str) -> Optional[Dict[str, Any]]:
        """Get a player by Epic name (case-insensitive)."""
        query = "SELECT * FROM players WHERE epic_name = ? COLLATE NOCASE"
        return self._execute_one(query, (epic_name,))

    def delete_player(self, player_id: str) -> bool:
        """
        Delete a player record.

        Returns:
            True if a record was removed
        """
        query = "DELETE FROM players WHERE player_id = ?"
        return self._execute_rowcount(query, (player_id,)) > 0

    def update_earnings(self, player_id: str, amount: float) -> None:
        """Add ``amount`` to a player's career earnings."""
        query = "UPDATE players SET earnings = earnings + ? WHERE player_id = ?"
        self._execute(query, (amount, player_id))

    def get_leaderboard(
        self, region: Optional[str] = None, limit: int = 10
    ) -> List[Dict[str, Any]]:
        """
        Get the top earners, optionally for one region.

        Returns:
            Player records ordered by earnings, highest first
        """
        if region:
            query = """
                SELECT * FROM players WHERE region = ?
                ORDER BY earnings DESC, epic_name ASC LIMIT ?
            """
            return self._execute(query, (region, limit), fetch=True) or []
        query = "SELECT * FROM players ORDER BY earnings DESC, epic_name ASC LIMIT ?"
        return self._execute(query, (limit,), fetch=True) or []

    def get_player_count(self) -> int:
        """Get total registered player count."""
        row = self._execute_one("SELECT COUNT(*) AS count FROM players")
        return row["count"] if row else 0
