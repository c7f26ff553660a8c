"""Database package.

All mixins compose into the Database class via multiple inheritance.
The MRO (Method Resolution Order) ensures ConnectionBase.__init__
runs first, then SchemaMixin._ensure_schema() creates the schema
on first use.
"""

from __future__ import annotations

from itchy.core.db.connection import ConnectionBase
from itchy.core.db.file_queries import FileQueryMixin
from itchy.core.db.game_queries import GameQueryMixin
from itchy.core.db.models import FileRecord, GameListing, GameRecord, TraitRecord
from itchy.core.db.schema import SchemaMixin
from itchy.core.db.search_queries import SearchQueryMixin
from itchy.core.db.trait_queries import TraitQueryMixin

__all__ = [
    "Database",
    "FileRecord",
    "GameListing",
    "GameRecord",
    "TraitRecord",
]


class Database(
    SchemaMixin,
    GameQueryMixin,
    FileQueryMixin,
    TraitQueryMixin,
    SearchQueryMixin,
    ConnectionBase,
):
    """Main database class composing all query mixins.

    Inherits connection management from ConnectionBase,
    schema handling from SchemaMixin, and all query methods
    from the remaining mixins.
    """

    def __enter__(self) -> Database:
        return self
