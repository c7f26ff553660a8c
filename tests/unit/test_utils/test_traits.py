"""Tests for trait canonicalization."""

from __future__ import annotations

import pytest

from itchy.utils.traits import normalize_trait, normalize_traits


class TestNormalizeTrait:
    """Tests for normalize_trait()."""

    def test_lowercases_and_dashes(self) -> None:
        assert normalize_trait("Some_Tag Name") == "some-tag-name"

    def test_keeps_existing_dashes(self) -> None:
        assert normalize_trait("point-and-click") == "point-and-click"

    def test_each_separator_becomes_one_dash(self) -> None:
        """Runs of separators are not collapsed."""
        assert normalize_trait("a _b") == "a--b"


class TestNormalizeTraits:
    """Tests for normalize_traits()."""

    def test_single_value(self) -> None:
        assert normalize_traits(["Some_Tag Name"]) == ["some-tag-name"]

    def test_drops_empty_and_default(self) -> None:
        assert normalize_traits(["A_B", "", "default", "C D"]) == ["a-b", "c-d"]

    def test_default_is_dropped_case_insensitively(self) -> None:
        """'Default' only becomes the placeholder after lower-casing."""
        assert normalize_traits(["Default", "DEFAULT"]) == []

    def test_keeps_order_and_duplicates(self) -> None:
        assert normalize_traits(["b", "A", "a"]) == ["b", "a", "a"]

    def test_empty_input(self) -> None:
        assert normalize_traits([]) == []

    def test_accepts_generators(self) -> None:
        assert normalize_traits(t for t in ["X Y"]) == ["x-y"]

    @pytest.mark.parametrize("raw", ["Some_Tag Name", "already-canonical", "MiXeD_case value", "default", ""])
    def test_idempotent(self, raw: str) -> None:
        once = normalize_traits([raw])
        assert normalize_traits(once) == once
