"""Search query construction with tag-prefix support.

Turns command line search terms into a single SQL statement:

- ``+tag`` keeps games whose aggregated trait list contains ``tag``
- ``-tag`` drops games whose aggregated trait list contains ``tag``
- anything else must occur in title, short description or author
  (and the long description in full mode)

All terms are substring matches combined with AND. Matching uses SQLite's
default ``LIKE`` semantics, which are case-insensitive for ASCII letters
only. Results are ranked by ``rating * rates``, then by title.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

logger = logging.getLogger("itchy.search")

__all__ = ["SearchQuery", "SearchService"]

_INCLUDE_PREFIX = "+"
_EXCLUDE_PREFIX = "-"

_SQL_TEMPLATE = """
    SELECT G.*,
           COALESCE(GROUP_CONCAT(T.trait, ', '), '') AS tags,
           {fulltext} AS fulltext
      FROM games G LEFT JOIN traits T ON G.gameid = T.gameid
     WHERE {where}
  GROUP BY G.gameid
    HAVING {having}
  ORDER BY G.rating * G.rates DESC, G.title
"""


@dataclass
class SearchQuery:
    """A compiled search: SQL plus positional parameters.

    ``where`` filters run on single game rows before grouping, ``having``
    filters on the aggregated tag list after grouping.
    """

    full: bool = False
    where: list[str] = field(default_factory=list)
    where_params: list[str] = field(default_factory=list)
    having: list[str] = field(default_factory=list)
    having_params: list[str] = field(default_factory=list)

    @property
    def fulltext_column(self) -> str:
        """SQL expression for the synthesized full text column."""
        columns = ["G.title", "G.short", "G.author"]
        if self.full:
            columns.append("G.long")
        return " || ".join(columns)

    @property
    def sql(self) -> str:
        return _SQL_TEMPLATE.format(
            fulltext=self.fulltext_column,
            where=" AND ".join(["1=1", *self.where]),
            having=" AND ".join(["1=1", *self.having]),
        )

    @property
    def params(self) -> list[str]:
        """Parameters in placeholder order (WHERE before HAVING)."""
        return [*self.where_params, *self.having_params]


class SearchService:
    """Builds search queries from free-form terms."""

    @staticmethod
    def build_query(terms: Iterable[str], full: bool = False) -> SearchQuery:
        """Compile search terms into a ranked query.

        An empty term list yields the complete, ranked library.

        Args:
            terms: Search terms, optionally prefixed with ``+`` or ``-``.
            full: Whether the long description takes part in text matching.

        Returns:
            The compiled query.
        """
        query = SearchQuery(full=full)

        for term in terms:
            if term.startswith(_INCLUDE_PREFIX):
                query.having.append("tags LIKE ?")
                query.having_params.append(f"%{term[1:]}%")
            elif term.startswith(_EXCLUDE_PREFIX):
                query.having.append("tags NOT LIKE ?")
                query.having_params.append(f"%{term[1:]}%")
            else:
                query.where.append("fulltext LIKE ?")
                query.where_params.append(f"%{term}%")

        return query
