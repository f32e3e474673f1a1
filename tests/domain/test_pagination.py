"""Tests for the term list paginator and search."""

from __future__ import annotations

import pytest

from facetctl.domain.pagination import PageWindow, search_terms, visible_slice
from facetctl.domain.terms import TermTree


class TestVisibleSlice:
    @pytest.mark.parametrize("total", [0, 1, 7, 20, 23])
    @pytest.mark.parametrize("per_page", [1, 5, 10])
    @pytest.mark.parametrize("page", [1, 2, 3])
    def test_length(self, total: int, per_page: int, page: int) -> None:
        flat = list(range(total))
        assert len(visible_slice(flat, per_page, page)) == min(per_page * page, total)

    def test_prefix(self) -> None:
        assert visible_slice("abcdefg", 2, 2) == ["a", "b", "c", "d"]

    @pytest.mark.parametrize(("per_page", "page"), [(0, 1), (5, 0), (-1, 2)])
    def test_rejects_non_positive(self, per_page: int, page: int) -> None:
        with pytest.raises(ValueError):
            visible_slice([1, 2, 3], per_page, page)


class TestPageWindow:
    def test_load_more_grows_until_total(self) -> None:
        flat = list(range(23))
        window = PageWindow(per_page=10)
        lengths = []
        for _ in range(5):
            lengths.append(len(window.visible(flat)))
            window = window.load_more()
        assert lengths == [10, 20, 23, 23, 23]

    def test_has_more(self) -> None:
        window = PageWindow(per_page=10, page=2)
        assert window.has_more(21)
        assert not window.has_more(20)

    def test_load_more_increments_page(self) -> None:
        assert PageWindow(per_page=5).load_more().page == 2

    def test_reset(self) -> None:
        assert PageWindow(per_page=5, page=4).reset() == PageWindow(per_page=5)

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            PageWindow(per_page=0)


class TestSearchTerms:
    def test_case_insensitive_label_match(self, term_tree: TermTree) -> None:
        found = search_terms(term_tree.flatten(), "ITAL")
        assert [n.slug for n in found] == ["italian"]

    def test_searches_whole_list(self, term_tree: TermTree) -> None:
        flat = term_tree.flatten()
        window = PageWindow(per_page=1)
        assert "hotels" not in [n.slug for n in window.visible(flat)]
        assert [n.slug for n in search_terms(flat, "hot")] == ["hotels"]

    def test_blank_query_matches_nothing(self, term_tree: TermTree) -> None:
        assert search_terms(term_tree.flatten(), "   ") == []

    def test_substring_in_many(self, term_tree: TermTree) -> None:
        assert [n.slug for n in search_terms(term_tree.flatten(), "a")] == [
            "restaurants",
            "italian",
            "bars",
        ]
