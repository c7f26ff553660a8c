"""Tests for search result rendering."""

from __future__ import annotations

from itchy.core.db import GameListing
from itchy.utils.formatting import format_listing


def _listing(**overrides) -> GameListing:
    values = dict(
        gameid=1,
        key=2,
        title="Puzzle Quest",
        short="Short text",
        long="Long description",
        url="https://dev.itch.io/puzzle-quest",
        author="dev",
        rating=4.5,
        rates=12,
        tags="is-game, puzzle",
    )
    values.update(overrides)
    return GameListing(**values)


class TestFormatListing:
    """Tests for format_listing()."""

    def test_layout(self) -> None:
        text = format_listing(_listing(), width=80)
        assert text.splitlines() == [
            "Puzzle Quest by dev 4.5/5 (12)",
            "Short text",
            "is-game, puzzle",
            "https://dev.itch.io/puzzle-quest",
        ]
        assert text.endswith("\n")

    def test_full_includes_long_description(self) -> None:
        text = format_listing(_listing(), full=True, width=80)
        assert "Long description" in text.splitlines()

    def test_long_description_hidden_by_default(self) -> None:
        assert "Long description" not in format_listing(_listing(), width=80)

    def test_empty_parts_are_skipped(self) -> None:
        text = format_listing(_listing(short="", tags=""), width=80)
        assert len(text.splitlines()) == 2

    def test_wraps_to_width(self) -> None:
        text = format_listing(_listing(short="word " * 40), width=30)
        assert all(len(line) <= 30 for line in text.splitlines()[1:-2])

    def test_integral_rating(self) -> None:
        assert format_listing(_listing(rating=5.0), width=80).startswith("Puzzle Quest by dev 5/5 (12)")
