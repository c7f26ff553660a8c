"""File (upload) queries."""

from __future__ import annotations

import logging
from dataclasses import asdict

from itchy.core.db.models import FileRecord

logger = logging.getLogger("itchy.database")

__all__ = ["FileQueryMixin"]


class FileQueryMixin:
    """Mixin providing file row operations.

    Requires ConnectionBase attributes: conn, query, save_record.
    """

    def upsert_file(self, record: FileRecord) -> None:
        """Insert a file, replacing any row with the same fileid.

        Does NOT commit -- caller is responsible for committing.

        Args:
            record: File data to store.
        """
        self.save_record("files", asdict(record))

    def get_files(self, gameid: int) -> list[FileRecord]:
        """Get all files of a game, ordered by name.

        Args:
            gameid: Upstream game id.

        Returns:
            List of stored files, empty if none.
        """
        rows = self.query("SELECT * FROM files WHERE gameid = ? ORDER BY name", (gameid,))
        return [FileRecord.from_row(row) for row in rows]

    def get_file(self, fileid: int) -> FileRecord | None:
        """Look up a single file by its upload id."""
        rows = self.query("SELECT * FROM files WHERE fileid = ?", (fileid,))
        return FileRecord.from_row(rows[0]) if rows else None

    def get_file_count(self) -> int:
        """Get total number of stored files."""
        return self.query("SELECT COUNT(*) FROM files")[0][0]
