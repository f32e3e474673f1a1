"""Tests for form query string building, parsing, and clearing."""

from __future__ import annotations

from facetctl.domain.query import build_query, clear_query, parse_query


class TestBuildQuery:
    def test_post_type_and_filters(self) -> None:
        query = build_query({"price": "10..90", "category": "a,b", "pets": 1}, "places")
        assert query == "type=places&price=10..90&category=a%2Cb&pets=1"

    def test_absent_values_skipped(self) -> None:
        assert build_query({"price": None, "keywords": ""}, "places") == "type=places"

    def test_no_post_type(self) -> None:
        assert build_query({"price": "10..90"}) == "price=10..90"

    def test_location_and_spaces(self) -> None:
        query = build_query({"near": "New York;40.7,-74,10"})
        assert query == "near=New+York%3B40.7%2C-74%2C10"

    def test_numbers(self) -> None:
        assert build_query({"guests": 2.5, "pets": 1}) == "guests=2.5&pets=1"

    def test_custom_post_type_param(self) -> None:
        assert build_query({}, "places", post_type_param="post_type") == "post_type=places"


class TestParseQuery:
    def test_splits_params(self) -> None:
        parsed = parse_query("?type=places&price=10..90&pg=2&category=a%2Cb")
        assert parsed.post_type == "places"
        assert parsed.values == {"price": "10..90", "category": "a,b"}
        assert parsed.system == {"pg": "2"}

    def test_last_filter_value_wins(self) -> None:
        assert parse_query("price=1..2&price=3..4").values == {"price": "3..4"}

    def test_first_post_type_wins(self) -> None:
        assert parse_query("type=a&type=b").post_type == "a"

    def test_empty(self) -> None:
        parsed = parse_query("")
        assert parsed.post_type is None
        assert parsed.values == {}

    def test_round_trip(self) -> None:
        values = {"near": "Paris;48.856614,2.352222,10", "category": "a,b"}
        parsed = parse_query(build_query(values, "places"))
        assert parsed.post_type == "places"
        assert parsed.values == values


class TestClearQuery:
    def test_keeps_pagination_and_post_type(self) -> None:
        assert clear_query("type=places&price=10..90&pg=2", "places") == "pg=2&type=places"

    def test_drops_post_type(self) -> None:
        assert clear_query("type=places&price=10..90&page=3") == "page=3"

    def test_drops_legacy_params(self) -> None:
        assert clear_query("filter_price=1..2&post_type=places") == ""

    def test_sets_post_type(self) -> None:
        assert clear_query("price=1..2", "events") == "type=events"
