# tests/conftest.py
from __future__ import annotations

import os
from typing import Any
from unittest.mock import MagicMock

# Keep a developer's .env / settings out of the test run
os.environ.pop("ITCH_API_KEY", None)
os.environ.pop("ITCHY_DB_PATH", None)

import pytest

from itchy.integrations.itch_models import LibraryEntry, Upload
from itchy.integrations.itch_page_scraper import GameMetadata


@pytest.fixture
def database(tmp_path):
    """Database using a temp file (schema loaded from SQL)."""
    from itchy.core.db import Database

    db_path = tmp_path / "test_itchy.sqlite"
    db = Database(db_path)
    yield db
    db.close()


def make_owned_key(
    gameid: int = 1001,
    key_id: int = 5001,
    title: str = "Puzzle Quest",
    **game_overrides: Any,
) -> dict[str, Any]:
    """Creates a minimal ``owned_keys`` item as returned by the API."""
    game = {
        "id": gameid,
        "title": title,
        "url": f"https://dev.itch.io/game-{gameid}",
        "short_text": f"Short text of {title}",
        "cover_url": f"https://img.itch.zone/{gameid}.png",
        "published_at": "2021-03-04T05:06:07.000000000Z",
        "classification": "game",
        "type": "default",
        "user": {"username": "dev"},
    }
    game.update(game_overrides)
    return {
        "id": key_id,
        "created_at": "2022-01-02T03:04:05.000000000Z",
        "game": game,
    }


def make_upload(upload_id: int = 9001, filename: str = "game-linux.zip", **overrides: Any) -> dict[str, Any]:
    """Creates a minimal ``uploads`` item as returned by the API."""
    upload = {
        "id": upload_id,
        "filename": filename,
        "size": 1048576,
        "updated_at": "2022-05-06T07:08:09.000000000Z",
        "type": "default",
        "traits": ["p_linux"],
    }
    upload.update(overrides)
    return upload


@pytest.fixture
def owned_key_factory():
    """Factory for API ``owned_keys`` items."""
    return make_owned_key


@pytest.fixture
def upload_factory():
    """Factory for API ``uploads`` items."""
    return make_upload


@pytest.fixture
def fake_api():
    """MagicMock standing in for ItchAPI with an in-memory library.

    Configure ``fake_api.library`` (list of pages of owned_keys dicts),
    ``fake_api.pages_meta`` (url -> GameMetadata) and
    ``fake_api.uploads`` (gameid -> list of upload dicts).
    """
    api = MagicMock()
    api.library = []
    api.pages_meta = {}
    api.uploads = {}

    def fetch_game_page(page: int) -> list[LibraryEntry]:
        if page > len(api.library):
            return []
        return [LibraryEntry.from_api(item) for item in api.library[page - 1]]

    def fetch_game_info(url: str) -> GameMetadata:
        return api.pages_meta.get(url, GameMetadata())

    def fetch_downloads(gameid: int, key_id: int) -> list[Upload]:
        return [Upload.from_api(item) for item in api.uploads.get(gameid, [])]

    api.fetch_game_page.side_effect = fetch_game_page
    api.fetch_game_info.side_effect = fetch_game_info
    api.fetch_downloads.side_effect = fetch_downloads
    return api


SAMPLE_GAME_PAGE = """
<html>
<head><title>Puzzle Quest by dev</title></head>
<body>
<div class="formatted_description user_formatted">
  <p>A game about puzzles.</p>
</div>
<div class="game_info_panel_widget">
  <table>
    <tbody>
      <tr><td>Updated</td><td><abbr title="06 May 2022 @ 07:08">May 06, 2022</abbr></td></tr>
      <tr><td>Status</td><td><a href="https://itch.io/games/released">Released</a></td></tr>
      <tr><td>Platforms</td><td><a href="https://itch.io/games/platform-linux">Linux</a></td></tr>
      <tr>
        <td>Rating</td>
        <td>
          <div class="star_value">
            <div class="aggregate_rating" title="4.6">Rated 4.6 out of 5 stars</div>
          </div>
          <span class="rating_count">(1,234<span class="screenreader_only"> total ratings</span>)</span>
        </td>
      </tr>
      <tr><td>Author</td><td><a href="https://dev.itch.io">dev</a></td></tr>
      <tr><td>Genre</td><td><a href="https://itch.io/games/genre-puzzle">Puzzle</a></td></tr>
      <tr>
        <td>Tags</td>
        <td>
          <a href="https://itch.io/games/tag-2d">2D</a>,
          <a href="https://itch.io/games/tag-pixel-art">Pixel Art</a>,
          <a href="https://itch.io/games/tag-point-and-click/">Point &amp; Click</a>
        </td>
      </tr>
      <tr><td>Category</td><td><a href="https://itch.io/games">Games</a></td></tr>
    </tbody>
  </table>
</div>
</body>
</html>
"""


@pytest.fixture
def sample_game_page() -> str:
    """Store page HTML of a game with every supported info row."""
    return SAMPLE_GAME_PAGE
