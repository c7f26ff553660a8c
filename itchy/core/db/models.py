"""Database data models.

Contains the row structures written to and read from the games, files
and traits tables.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, fields

__all__ = [
    "FileRecord",
    "GameListing",
    "GameRecord",
    "TraitRecord",
]


@dataclass
class GameRecord:
    """Single game row.

    ``key`` is the id of the download key that grants access to the game.
    Timestamps are stored as delivered by the API (ISO-like strings).
    """

    gameid: int
    key: int
    title: str
    short: str = ""
    long: str = ""
    url: str = ""
    picurl: str = ""
    bought: str | None = None
    published: str | None = None
    author: str = ""
    rating: float = 0.0  # 0-5
    rates: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> GameRecord:
        """Build a record from a games row, ignoring extra columns."""
        keys = set(row.keys())
        return cls(**{f.name: row[f.name] for f in fields(cls) if f.name in keys})


@dataclass
class GameListing(GameRecord):
    """A game row joined with its comma separated trait list."""

    tags: str = ""

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> GameListing:
        listing = super().from_row(row)
        listing.tags = listing.tags or ""
        return listing


@dataclass
class FileRecord:
    """Single downloadable file (upload) of a game."""

    fileid: int
    gameid: int
    name: str
    size: int | None = None  # bytes
    updated: str | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> FileRecord:
        return cls(
            fileid=row["fileid"],
            gameid=row["gameid"],
            name=row["name"],
            size=row["size"],
            updated=row["updated"],
        )


@dataclass(frozen=True)
class TraitRecord:
    """Canonical tag attached to a game."""

    gameid: int
    trait: str
