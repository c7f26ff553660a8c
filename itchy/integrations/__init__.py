from __future__ import annotations

__all__: list[str] = ["ItchAPI", "LibraryEntry", "Upload"]

from itchy.integrations.itch_api import ItchAPI
from itchy.integrations.itch_models import LibraryEntry, Upload
