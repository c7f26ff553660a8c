"""Library synchronization.

Pages through the owned keys of an itch.io account and stores every game
that is not in the database yet, together with its scraped metadata, its
downloadable files and the traits derived from all of them.

Games already present are skipped entirely. Their metadata is never
refreshed and an entry whose files failed to download on an earlier run
stays without files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from itchy.core.db import FileRecord, GameRecord, TraitRecord
from itchy.utils.traits import normalize_traits

if TYPE_CHECKING:
    from itchy.core.db import Database
    from itchy.integrations.itch_api import ItchAPI
    from itchy.integrations.itch_models import LibraryEntry
    from itchy.integrations.itch_page_scraper import GameMetadata

logger = logging.getLogger("itchy.sync")

__all__ = ["LibrarySyncService", "SyncStats"]


@dataclass(frozen=True)
class SyncStats:
    """Statistics from a library sync run."""

    pages: int
    games_added: int
    games_skipped: int
    files_saved: int


class LibrarySyncService:
    """Mirrors the owned library into the database, one entry at a time.

    Args:
        api: Client used for the library listing, game pages and uploads.
        database: Store the games, files and traits are written to.
    """

    def __init__(self, api: ItchAPI, database: Database) -> None:
        self._api = api
        self._db = database

    def sync(self) -> SyncStats:
        """Fetch all library pages and add the games not stored yet.

        Starts at page 1 and stops at the first page without entries.

        Returns:
            Counts of the processed pages, added/skipped games and saved files.
        """
        pages = added = skipped = files = 0

        page = 1
        while True:
            entries = self._api.fetch_game_page(page)
            if not entries:
                break
            pages += 1

            for entry in entries:
                saved = self.add_game(entry)
                if saved is None:
                    skipped += 1
                else:
                    added += 1
                    files += saved

            page += 1

        stats = SyncStats(pages=pages, games_added=added, games_skipped=skipped, files_saved=files)
        logger.info(
            "Sync finished: %d added, %d skipped, %d file(s) from %d page(s)",
            stats.games_added,
            stats.games_skipped,
            stats.files_saved,
            stats.pages,
        )
        return stats

    def add_game(self, entry: LibraryEntry) -> int | None:
        """Store a game with its metadata, traits and files.

        Existing games are skipped without any request.

        Args:
            entry: The owned library entry.

        Returns:
            Number of files saved, or None if the game was skipped.
        """
        if self._db.exists(entry.gameid):
            logger.info("Skipping %s (%d)", entry.title, entry.gameid)
            return None
        logger.info("Fetching %s (%d)...", entry.title, entry.gameid)

        meta = self._api.fetch_game_info(entry.url)
        self._db.upsert_game(self._build_game(entry, meta))

        self._db.clear_traits(entry.gameid)
        if entry.classification:
            self._save_traits(entry.gameid, [f"is-{entry.classification}"])
        self._save_traits(entry.gameid, [entry.game_type])
        if meta.status:
            self._save_traits(entry.gameid, [meta.status])
        if meta.genre:
            self._save_traits(entry.gameid, [meta.genre])
        if meta.tags:
            self._save_traits(entry.gameid, meta.tags)
        self._db.commit()

        uploads = self._api.fetch_downloads(entry.gameid, entry.key_id)
        for upload in uploads:
            self._db.upsert_file(
                FileRecord(
                    fileid=upload.upload_id,
                    gameid=entry.gameid,
                    name=upload.filename,
                    size=upload.size,
                    updated=upload.updated_at,
                )
            )

            if upload.extension:
                self._save_traits(entry.gameid, [f"file-{upload.extension}"])
            self._save_traits(entry.gameid, [upload.upload_type, *upload.traits])
        self._db.commit()

        logger.info("%d file(s)", len(uploads))
        logger.info(",".join(self._db.get_traits(entry.gameid)))
        return len(uploads)

    @staticmethod
    def _build_game(entry: LibraryEntry, meta: GameMetadata) -> GameRecord:
        """Combine the library entry and the scraped page into a game row."""
        return GameRecord(
            gameid=entry.gameid,
            key=entry.key_id,
            title=entry.title,
            short=entry.short_text,
            long=meta.description,
            url=entry.url,
            picurl=entry.cover_url,
            bought=entry.created_at,
            published=entry.published_at,
            author=entry.author,
            rating=meta.rating,
            rates=meta.rates,
        )

    def _save_traits(self, gameid: int, raw: Iterable[str]) -> None:
        """Normalize and store traits for a game."""
        for trait in normalize_traits(raw):
            self._db.upsert_trait(TraitRecord(gameid=gameid, trait=trait))
