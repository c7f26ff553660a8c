"""
Configuration for itchy.

Resolves the database location, the itch.io API endpoint and the API key
from defaults, an optional settings.json and the environment (.env aware).

Data lives in the per-user data directory (``$XDG_DATA_HOME/itchy``,
``~/.local/share/itchy`` by default), so an installed package never writes
next to its own sources.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("itchy.config")


__all__ = ["Config", "config", "default_data_dir"]


def default_data_dir() -> Path:
    """Return the per-user itchy data directory.

    Returns:
        ``$XDG_DATA_HOME/itchy``, falling back to ``~/.local/share/itchy``.
    """
    xdg = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(xdg) / "itchy"


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, the API endpoint and the API key.
    """

    DATA_DIR: Path = field(default_factory=default_data_dir)

    # Default to files inside DATA_DIR
    SETTINGS_FILE: Path | None = None
    DB_PATH: Path | None = None

    API_BASE_URL: str = "https://api.itch.io"
    REQUEST_TIMEOUT: float = 30.0

    # API KEY (itch.io user settings -> API keys)
    ITCH_API_KEY: str | None = None

    def __post_init__(self):
        """Load settings file and environment after instantiation."""
        if self.SETTINGS_FILE is None:
            self.SETTINGS_FILE = self.DATA_DIR / "settings.json"
        if self.DB_PATH is None:
            self.DB_PATH = self.DATA_DIR / "itchy.sqlite"

        self._load_settings()

        load_dotenv()
        env_key = os.getenv("ITCH_API_KEY")
        if env_key:
            self.ITCH_API_KEY = env_key

        env_db = os.getenv("ITCHY_DB_PATH")
        if env_db:
            self.DB_PATH = Path(env_db).expanduser()

        env_timeout = os.getenv("ITCHY_REQUEST_TIMEOUT")
        if env_timeout:
            try:
                self.REQUEST_TIMEOUT = float(env_timeout)
            except ValueError:
                logger.warning("Ignoring invalid ITCHY_REQUEST_TIMEOUT: %s", env_timeout)

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)

                self.ITCH_API_KEY = data.get("api_key", self.ITCH_API_KEY)
                self.REQUEST_TIMEOUT = float(data.get("request_timeout", self.REQUEST_TIMEOUT))

                db_path = data.get("db_path")
                if db_path:
                    self.DB_PATH = Path(db_path).expanduser()

        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error("Could not load settings from %s: %s", self.SETTINGS_FILE, e)


# Global config instance
config = Config()
