"""Single-game operations.

Handles the dedup check, insert-or-replace and lookups for the games table.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from itchy.core.db.models import GameRecord

logger = logging.getLogger("itchy.database")

__all__ = ["GameQueryMixin"]


class GameQueryMixin:
    """Mixin providing single-game operations.

    Requires ConnectionBase attributes: conn, query, save_record.
    """

    def exists(self, gameid: int) -> bool:
        """Check whether a game row with the given id is present.

        Args:
            gameid: Upstream game id.

        Returns:
            True if the game is already stored.
        """
        return bool(self.query("SELECT gameid FROM games WHERE gameid = ?", (gameid,)))

    def upsert_game(self, record: GameRecord) -> None:
        """Insert a game, replacing any row with the same gameid.

        Does NOT commit -- caller is responsible for committing.

        Args:
            record: Game data to store.
        """
        self.save_record("games", asdict(record))

    def get_game(self, gameid: int) -> GameRecord | None:
        """Load a single game.

        Args:
            gameid: Upstream game id.

        Returns:
            The stored game or None if not found.
        """
        rows = self.query("SELECT * FROM games WHERE gameid = ?", (gameid,))
        return GameRecord.from_row(rows[0]) if rows else None

    def get_game_count(self) -> int:
        """Get number of stored games."""
        return self.query("SELECT COUNT(*) FROM games")[0][0]
