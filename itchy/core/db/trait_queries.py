"""Game trait queries.

Traits are replaced as a whole per game: clear_traits() followed by
upsert_trait() for every trait of the current enrichment pass.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from itchy.core.db.models import TraitRecord

logger = logging.getLogger("itchy.database")

__all__ = ["TraitQueryMixin"]


class TraitQueryMixin:
    """Mixin providing trait operations.

    Requires ConnectionBase attributes: conn, query, save_record.
    """

    def upsert_trait(self, record: TraitRecord) -> None:
        """Attach a trait to a game. Identical pairs collapse into one row.

        Does NOT commit -- caller is responsible for committing.

        Args:
            record: The (gameid, trait) pair.
        """
        self.save_record("traits", asdict(record))

    def clear_traits(self, gameid: int) -> None:
        """Delete all traits of a game.

        Args:
            gameid: Upstream game id.
        """
        self.query("DELETE FROM traits WHERE gameid = ?", (gameid,))

    def get_traits(self, gameid: int) -> list[str]:
        """Get the traits of a game in insertion order.

        Args:
            gameid: Upstream game id.

        Returns:
            List of trait strings.
        """
        rows = self.query("SELECT trait FROM traits WHERE gameid = ? ORDER BY rowid", (gameid,))
        return [row["trait"] for row in rows]

    def get_trait_count(self) -> int:
        """Get total number of game-trait associations."""
        return self.query("SELECT COUNT(*) FROM traits")[0][0]
