"""Trait canonicalization.

Upstream tags, genres, classifications and upload types arrive in mixed
spellings ("Puzzle", "point_and_click", "Visual Novel"). They are stored
lower-cased and dash separated so that ``+visual-novel`` finds all of them.
"""

from __future__ import annotations

from typing import Iterable

__all__ = ["IGNORED_TRAITS", "normalize_trait", "normalize_traits"]

# Values the API uses as "nothing set"
IGNORED_TRAITS: frozenset[str] = frozenset({"", "default"})


def normalize_trait(value: str) -> str:
    """Canonicalize a single trait: lower-case, ``_`` and spaces become ``-``."""
    return value.lower().replace("_", "-").replace(" ", "-")


def normalize_traits(values: Iterable[str]) -> list[str]:
    """Canonicalize a sequence of raw traits.

    Empty values and the upstream placeholder ``default`` are dropped.
    Order is kept and duplicates are not removed.

    Args:
        values: Raw trait strings. Callers wrap single values in a list.

    Returns:
        The canonical traits.
    """
    traits = (normalize_trait(value) for value in values)
    return [trait for trait in traits if trait not in IGNORED_TRAITS]
