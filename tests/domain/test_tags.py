"""Tests for tag normalization and tag-list rules."""

from __future__ import annotations

import pytest

from candoo.domain.tags import (
    add_tag_to_list,
    has_tag,
    normalize_tag,
    normalize_tags,
    remove_tag_from_list,
)


class TestNormalizeTag:
    def test_trims_and_lowercases(self) -> None:
        assert normalize_tag("  Backend  ") == "backend"

    def test_casefold(self) -> None:
        """German sharp s folds to 'ss'."""
        assert normalize_tag("Straße") == normalize_tag("STRASSE")

    def test_nfkc(self) -> None:
        """Fullwidth letters fold to ASCII."""
        assert normalize_tag("ＡＰＩ") == "api"

    def test_inner_whitespace_preserved(self) -> None:
        assert normalize_tag(" Good First Issue ") == "good first issue"


class TestNormalizeTags:
    def test_dedupes_first_occurrence_wins(self) -> None:
        assert normalize_tags(["UI", "backend", "ui", "Backend "]) == ["ui", "backend"]

    def test_drops_blank(self) -> None:
        assert normalize_tags(["", "   ", "bug"]) == ["bug"]

    def test_empty(self) -> None:
        assert normalize_tags([]) == []


class TestHasTag:
    def test_case_insensitive(self) -> None:
        assert has_tag(["backend"], "BACKEND")

    def test_absent(self) -> None:
        assert not has_tag(["backend"], "frontend")

    def test_unnormalized_list(self) -> None:
        assert has_tag(["Backend "], "backend")


class TestAddRemove:
    def test_add_appends_normalized(self) -> None:
        assert add_tag_to_list(["bug"], " UI ") == ["bug", "ui"]

    def test_add_existing_is_noop(self) -> None:
        assert add_tag_to_list(["bug"], "BUG") == ["bug"]

    def test_add_returns_new_list(self) -> None:
        tags = ["bug"]
        result = add_tag_to_list(tags, "ui")
        assert tags == ["bug"]
        assert result is not tags

    def test_remove(self) -> None:
        assert remove_tag_from_list(["bug", "ui"], "UI") == ["bug"]

    def test_remove_absent_is_noop(self) -> None:
        assert remove_tag_from_list(["bug"], "ui") == ["bug"]

    @pytest.mark.parametrize(
        "tags,tag",
        [
            ([], "bug"),
            (["ui", "backend"], "Bug"),
            (["ui"], "  perf "),
        ],
    )
    def test_add_then_remove_restores_membership(self, tags: list[str], tag: str) -> None:
        result = remove_tag_from_list(add_tag_to_list(tags, tag), tag)
        assert set(normalize_tags(result)) == set(normalize_tags(tags))
