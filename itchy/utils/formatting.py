"""Terminal rendering of search results."""

from __future__ import annotations

import shutil
import textwrap
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itchy.core.db import GameListing

__all__ = ["format_listing"]


def _wrap(text: str, width: int) -> list[str]:
    """Word-wrap every paragraph of a text, keeping blank lines out."""
    lines: list[str] = []
    for paragraph in text.splitlines():
        if paragraph.strip():
            lines.extend(textwrap.wrap(paragraph, width=width, break_long_words=False, break_on_hyphens=False))
    return lines


def format_listing(listing: GameListing, full: bool = False, width: int | None = None) -> str:
    """Render a search hit as a block of wrapped lines.

    Layout: headline (title, author, rating), short description, long
    description (full mode only), tags, URL. Empty parts are left out.

    Args:
        listing: The game to render.
        full: Include the long description.
        width: Line width, defaults to the terminal width.

    Returns:
        The rendered block including a trailing blank line.
    """
    if width is None:
        width = shutil.get_terminal_size().columns

    headline = f"{listing.title} by {listing.author} {listing.rating:g}/5 ({listing.rates})"
    parts = [headline, listing.short]
    if full:
        parts.append(listing.long)
    parts.extend([listing.tags, listing.url])

    lines: list[str] = []
    for part in parts:
        lines.extend(_wrap(part or "", width))
    return "\n".join(lines) + "\n"
