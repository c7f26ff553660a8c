"""itch.io API client.

Talks to the (undocumented) api.itch.io endpoints used by the itch app to
list the owned library and the uploads of a game, and loads the public
store pages that the page scraper reads ratings and tags from.

Errors are not swallowed here: HTTP failures raise requests exceptions so
that a sync run stops instead of storing half-fetched games.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import requests

from itchy.integrations.itch_models import LibraryEntry, Upload
from itchy.integrations.itch_page_scraper import GameMetadata, parse_game_page

logger = logging.getLogger("itchy.itch_api")

__all__ = ["ItchAPI"]


class ItchAPI:
    """Client for the itch.io API authorized with a personal API key.

    Get a key from https://itch.io/user/settings/api-keys
    """

    BASE_URL = "https://api.itch.io"

    _HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "User-Agent": "itchy (+https://itch.io)",
    }

    def __init__(self, api_key: str, base_url: str | None = None, timeout: float = 30.0) -> None:
        """Initialize the client.

        Args:
            api_key: itch.io API key, sent as bearer token.
            base_url: Override for the API root (tests, proxies).
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

        self._session = requests.Session()
        self._session.headers.update(self._HEADERS)
        self._session.headers["Authorization"] = f"Bearer {api_key}"

    def fetch_game_page(self, page: int) -> list[LibraryEntry]:
        """Get one page of owned keys from the library.

        Args:
            page: 1-based page number.

        Returns:
            The entries of that page, empty once past the last page.
        """
        data = self._get_json(f"{self.base_url}/profile/owned-keys", {"page": page})
        owned_keys = data.get("owned_keys") or []
        logger.debug("Library page %d: %d entries", page, len(owned_keys))
        return [LibraryEntry.from_api(item) for item in owned_keys]

    def fetch_game_info(self, url: str) -> GameMetadata:
        """Scrape additional info about a game from its store page.

        The API key is not sent along since store pages may live on
        creator subdomains.

        Args:
            url: The game's store page URL.

        Returns:
            The scraped metadata.
        """
        response = self._session.get(
            url,
            headers={"Authorization": None, "Accept": "text/html,application/xhtml+xml"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return parse_game_page(response.content)

    def fetch_downloads(self, gameid: int, key_id: int) -> list[Upload]:
        """Get the list of downloadable files for a game.

        Args:
            gameid: Upstream game id.
            key_id: Download key granting access to the files.

        Returns:
            The game's uploads.
        """
        data = self._get_json(
            f"{self.base_url}/games/{int(gameid)}/uploads",
            {"download_key_id": int(key_id)},
        )
        return [Upload.from_api(item) for item in data.get("uploads") or []]

    def get_download_url(self, gameid: int, fileid: int, key_id: int) -> str:
        """Return a URL with which the given file can be downloaded.

        Opens a download session first; its uuid is part of the URL.

        Args:
            gameid: Game the file belongs to.
            fileid: Upload id of the file.
            key_id: Download key granting access to the file.

        Returns:
            The direct download URL.
        """
        response = self._session.post(
            f"{self.base_url}/games/{int(gameid)}/download-sessions",
            timeout=self.timeout,
        )
        response.raise_for_status()
        session_uuid = response.json()["uuid"]

        query = urlencode({"api_key": self.api_key, "download_key_id": int(key_id), "uuid": session_uuid})
        return f"{self.base_url}/uploads/{int(fileid)}/download?{query}"

    def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET an API endpoint and decode the JSON object it returns.

        Args:
            url: Endpoint URL.
            params: Query parameters.

        Returns:
            The decoded response, empty dict if it is not a JSON object.
        """
        response = self._session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            logger.warning("Unexpected response from %s: %r", url, type(data).__name__)
            return {}
        if "errors" in data:
            logger.warning("API reported errors for %s: %s", url, data["errors"])
        return data
