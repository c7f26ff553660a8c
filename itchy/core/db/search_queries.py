"""Search query execution.

Runs a compiled SearchQuery against the games/traits join.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from itchy.core.db.models import GameListing

if TYPE_CHECKING:
    from itchy.services.search_service import SearchQuery

logger = logging.getLogger("itchy.database")

__all__ = ["SearchQueryMixin"]


class SearchQueryMixin:
    """Mixin providing the ranked search read path.

    Requires ConnectionBase attributes: query.
    """

    def search(self, search_query: SearchQuery) -> list[GameListing]:
        """Execute a compiled search.

        Args:
            search_query: Output of SearchService.build_query().

        Returns:
            Matching games with their aggregated tags, best rated first.
        """
        logger.debug(search_query.sql)
        logger.debug(", ".join(str(param) for param in search_query.params))

        rows = self.query(search_query.sql, search_query.params)
        return [GameListing.from_row(row) for row in rows]
