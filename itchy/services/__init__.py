from __future__ import annotations

from itchy.services.library_sync_service import LibrarySyncService, SyncStats
from itchy.services.search_service import SearchQuery, SearchService

__all__: list[str] = [
    "LibrarySyncService",
    "SearchQuery",
    "SearchService",
    "SyncStats",
]
