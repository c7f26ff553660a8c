"""Data models for itch.io API payloads.

Parses the owned-keys and uploads JSON objects into typed dataclasses,
defaulting the fields the API leaves out for some games.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

__all__ = ["LibraryEntry", "Upload"]


@dataclass(frozen=True)
class LibraryEntry:
    """One owned key from the user's library, wrapping the game it unlocks.

    Args:
        key_id: Id of the download key (entitlement).
        gameid: Upstream game id.
        title: Game title.
        url: Store page of the game.
        created_at: When the key was acquired.
        published_at: When the game was published.
        author: Username of the game's creator.
        classification: Upstream classification (game, tool, comic, ...).
        game_type: Upstream type (default, html, flash, ...).
        short_text: Short description, empty if unset.
        cover_url: Cover image URL, empty if unset.
    """

    key_id: int
    gameid: int
    title: str
    url: str
    created_at: str | None = None
    published_at: str | None = None
    author: str = ""
    classification: str = ""
    game_type: str = ""
    short_text: str = ""
    cover_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> LibraryEntry:
        """Build an entry from one item of the ``owned_keys`` collection."""
        game = data["game"]
        user = game.get("user") or {}
        return cls(
            key_id=data["id"],
            gameid=game["id"],
            title=game.get("title", ""),
            url=game.get("url", ""),
            created_at=data.get("created_at"),
            published_at=game.get("published_at"),
            author=user.get("username", ""),
            classification=game.get("classification") or "",
            game_type=game.get("type") or "",
            short_text=game.get("short_text") or "",
            cover_url=game.get("cover_url") or "",
        )


@dataclass(frozen=True)
class Upload:
    """A downloadable file of a game."""

    upload_id: int
    filename: str
    size: int | None = None
    updated_at: str | None = None
    upload_type: str = ""
    traits: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Upload:
        """Build an upload from one item of the ``uploads`` collection."""
        return cls(
            upload_id=data["id"],
            filename=data.get("filename") or "",
            size=data.get("size"),
            updated_at=data.get("updated_at"),
            upload_type=data.get("type") or "",
            traits=list(data.get("traits") or []),
        )

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot of the filename, empty if none."""
        name = PurePosixPath(self.filename).name
        if "." not in name:
            return ""
        return name.rpartition(".")[2].lower()
