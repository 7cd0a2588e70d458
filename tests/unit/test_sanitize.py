"""Unit tests for field sanitizers: strings, numbers, points, addresses, None stripping."""
import math

from tools.sanitize import (
    dedupe_points,
    dedupe_strings,
    normalize_addresses,
    remove_none_deep,
    sanitize_string,
    to_number,
)


def test_sanitize_string():
    assert sanitize_string("  Paris  ") == "Paris"
    assert sanitize_string("   ") is None
    assert sanitize_string("") is None
    assert sanitize_string(None) is None
    assert sanitize_string(12) is None


def test_to_number_accepts_numbers_and_numeric_strings():
    assert to_number(2000) == 2000
    assert to_number(12.5) == 12.5
    assert to_number("2000") == 2000
    assert isinstance(to_number("2000"), int)
    assert to_number(" 12.5 ") == 12.5
    assert to_number(0) == 0


def test_to_number_rejects_garbage():
    assert to_number("1200€") is None
    assert to_number("") is None
    assert to_number("   ") is None
    assert to_number(None) is None
    assert to_number(True) is None
    assert to_number(math.nan) is None
    assert to_number("inf") is None
    assert to_number("1_000") is None
    assert to_number([1]) is None
    assert to_number(10**400) is None
    assert to_number("9" * 400) is None


def test_dedupe_strings_trims_and_removes_duplicates():
    assert dedupe_strings(["Great team", "Great team", "  Great team  "]) == ["Great team"]
    assert dedupe_strings(["b", "a", "b"]) == ["b", "a"]
    assert dedupe_strings(["  ", ""]) is None
    assert dedupe_strings("not a list") is None


def test_dedupe_points_accepts_collection_form():
    assert dedupe_points({"values": [{"text": "Solid team"}, {"text": " Solid team "}, {"text": ""}]}) == [
        "Solid team"
    ]
    assert dedupe_points(["x", "y"]) == ["x", "y"]
    assert dedupe_points(None) is None


class TestNormalizeAddresses:

    def test_bare_string_is_promoted(self):
        assert normalize_addresses(["12 rue des Fleurs"]) == [{"address": "12 rue des Fleurs"}]

    def test_blank_address_is_dropped(self):
        assert not normalize_addresses([{"address": "  ", "price": 5}])

    def test_object_attributes_are_sanitized(self):
        out = normalize_addresses(
            [{"address": " 1 Main St ", "price": "1200", "surface": " 85m² ", "locationType": "  "}]
        )
        assert out == [{"address": "1 Main St", "price": 1200, "surface": "85m²"}]

    def test_invalid_price_is_omitted(self):
        assert normalize_addresses([{"address": "A", "price": "cheap"}]) == [{"address": "A"}]

    def test_collection_form(self):
        assert normalize_addresses({"values": [{"address": "A"}, "B"]}) == [{"address": "A"}, {"address": "B"}]

    def test_non_list_gives_none(self):
        assert normalize_addresses(None) is None
        assert normalize_addresses("A") is None


def test_remove_none_deep_at_any_depth():
    body = {
        "a": None,
        "b": {"c": None, "d": 1, "e": [None, {"f": None, "g": "x"}]},
        "h": [None],
        "i": 0,
        "j": "",
    }
    assert remove_none_deep(body) == {"b": {"d": 1, "e": [{"g": "x"}]}, "h": [], "i": 0, "j": ""}
