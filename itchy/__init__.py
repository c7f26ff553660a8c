"""itchy - mirror an itch.io library into a local SQLite database."""

from __future__ import annotations

from itchy.version import __version__

__all__ = ["__version__"]
