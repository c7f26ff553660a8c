"""itch.io game page scraper.

The API does not expose ratings, tags or genres, so they are read from the
public store page of a game. The "More information" panel is a two column
table; each row is dispatched by its (lower-cased) label to one of a few
extraction strategies.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger("itchy.page_scraper")

__all__ = [
    "EXTRACTION_RULES",
    "ExtractionRule",
    "GameMetadata",
    "PageParseError",
    "extract_metadata",
    "parse_game_page",
]

_DESCRIPTION_SELECTOR = ".formatted_description"
_INFO_ROW_SELECTOR = ".game_info_panel_widget table tr"
_RATING_SELECTOR = ".aggregate_rating"

# "(1,234 total ratings)", possibly preceded by the screen reader star text
_RATES_PATTERN = re.compile(r"\(\s*([\d,]+)")
_LEADING_NUMBER_PATTERN = re.compile(r"\s*([\d,]+)")


class PageParseError(ValueError):
    """Raised when a game page is not an HTML document at all."""


@dataclass
class GameMetadata:
    """Metadata scraped from a game page.

    ``tags``, ``genre``, ``category`` and ``status`` are slugs taken from
    link targets. Rows without a dedicated field end up in ``info`` keyed
    by their lower-cased label.
    """

    description: str = ""
    rating: float = 0.0
    rates: int = 0
    tags: list[str] = field(default_factory=list)
    genre: str | None = None
    category: str | None = None
    status: str | None = None
    info: dict[str, str] = field(default_factory=dict)


class ExtractionRule(Enum):
    """How the value cell of an info row is read."""

    TEXT = "text"
    SLUG = "slug"
    RATING = "rating"
    TAG_LIST = "tag_list"


# Row label -> rule; unlisted labels fall back to TEXT
EXTRACTION_RULES: dict[str, ExtractionRule] = {
    "tags": ExtractionRule.TAG_LIST,
    "rating": ExtractionRule.RATING,
    "genre": ExtractionRule.SLUG,
    "category": ExtractionRule.SLUG,
    "status": ExtractionRule.SLUG,
}


def _slug(href: str) -> str:
    """Return the trailing path segment of a link target."""
    return posixpath.basename(urlsplit(href).path.rstrip("/"))


def _extract_text(key: str, cell: Tag) -> dict[str, Any]:
    return {key: cell.get_text().strip()}


def _extract_slug(key: str, cell: Tag) -> dict[str, Any]:
    anchor = cell.find("a", href=True)
    if anchor is None:
        logger.debug("No link in '%s' row, skipping", key)
        return {}
    return {key: _slug(anchor["href"])}


def _extract_tag_list(key: str, cell: Tag) -> dict[str, Any]:
    return {key: [_slug(anchor["href"]) for anchor in cell.find_all("a", href=True)]}


def _extract_rating(key: str, cell: Tag) -> dict[str, Any]:
    values: dict[str, Any] = {}

    indicator = cell.select_one(_RATING_SELECTOR)
    if indicator is not None and indicator.get("title"):
        try:
            values["rating"] = float(indicator["title"])
        except ValueError:
            logger.debug("Unparsable rating: %s", indicator["title"])

    text = cell.get_text().strip()
    match = _RATES_PATTERN.search(text) or _LEADING_NUMBER_PATTERN.match(text.strip("()"))
    if match:
        values["rates"] = int(match.group(1).replace(",", ""))

    return values


_EXTRACTORS: dict[ExtractionRule, Callable[[str, Tag], dict[str, Any]]] = {
    ExtractionRule.TEXT: _extract_text,
    ExtractionRule.SLUG: _extract_slug,
    ExtractionRule.RATING: _extract_rating,
    ExtractionRule.TAG_LIST: _extract_tag_list,
}


def extract_metadata(document: BeautifulSoup) -> GameMetadata:
    """Extract metadata from a parsed game page.

    Args:
        document: The parsed HTML of the game's store page.

    Returns:
        The scraped metadata. Missing rows leave their defaults in place.
    """
    description = document.select_one(_DESCRIPTION_SELECTOR)
    metadata = GameMetadata(description=description.get_text().strip() if description else "")

    values: dict[str, Any] = {}
    for row in document.select(_INFO_ROW_SELECTOR):
        cells = row.find_all("td")
        if len(cells) < 2:
            continue

        key = cells[0].get_text().strip().lower()
        rule = EXTRACTION_RULES.get(key, ExtractionRule.TEXT)
        values.update(_EXTRACTORS[rule](key, cells[1]))

    metadata.rating = values.pop("rating", metadata.rating)
    metadata.rates = values.pop("rates", metadata.rates)
    metadata.tags = values.pop("tags", metadata.tags)
    metadata.genre = values.pop("genre", None)
    metadata.category = values.pop("category", None)
    metadata.status = values.pop("status", None)
    metadata.info = values

    return metadata


def parse_game_page(html: str | bytes) -> GameMetadata:
    """Parse the raw HTML of a game page.

    Args:
        html: Response body of the game's store page.

    Returns:
        The scraped metadata.

    Raises:
        PageParseError: If the body contains no HTML markup.
    """
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")

    if not html.strip():
        raise PageParseError("Empty game page")

    document = BeautifulSoup(html, "html.parser")
    if document.find() is None:
        raise PageParseError("Game page contains no HTML markup")

    return extract_metadata(document)
