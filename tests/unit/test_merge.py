"""Unit tests for merge_defaults: scalar fallback, set unions, extraFields shallow merge."""
import pytest

from tools.merge import LOCATION_FIELDS, MATURITY_FIELDS, merge_defaults


def test_scalar_prefers_dynamic_value():
    merged = merge_defaults({"address": "default", "price": 10}, {"address": "dynamic"})
    assert merged["address"] == "dynamic"
    assert merged["price"] == 10


def test_scalar_none_falls_back_to_default():
    merged = merge_defaults({"surface": "85m²"}, {"surface": None})
    assert merged["surface"] == "85m²"


def test_falsy_dynamic_values_are_kept():
    merged = merge_defaults({"maturityPercentage": 50}, {"maturityPercentage": 0})
    assert merged["maturityPercentage"] == 0


def test_points_are_deduplicated_union():
    merged = merge_defaults(
        {"positivePoints": ["Solid team", "Traction"]},
        {"positivePoints": ["Traction", "Funding"]},
    )
    assert sorted(merged["positivePoints"]) == ["Funding", "Solid team", "Traction"]


def test_addresses_union_compares_objects_by_value():
    merged = merge_defaults(
        {"addresses": [{"address": "A"}]},
        {"addresses": [{"address": "A"}, "B"]},
    )
    assert merged["addresses"] == [{"address": "A"}, {"address": "B"}]


@pytest.mark.parametrize("dynamic_entry", ["1 Main St", " 1 Main St ", {"address": "1 Main St "}])
def test_addresses_union_matches_raw_agent_entries(dynamic_entry):
    merged = merge_defaults({"addresses": [{"address": "1 Main St"}]}, {"addresses": [dynamic_entry]})
    assert merged["addresses"] == [{"address": "1 Main St"}]


def test_addresses_union_drops_blank_entries():
    merged = merge_defaults({}, {"addresses": ["  ", {"address": ""}]})
    assert "addresses" not in merged


def test_empty_sets_stay_absent():
    merged = merge_defaults({"negativePoints": []}, {"negativePoints": []})
    assert "negativePoints" not in merged
    assert "positivePoints" not in merged


def test_dynamic_none_is_treated_as_empty():
    merged = merge_defaults({"sessionId": "s-1"}, None)
    assert merged["sessionId"] == "s-1"
    assert merged["extraFields"] == {}


@pytest.mark.parametrize(
    "default_extra, dynamic_extra",
    [
        ({}, {}),
        ({"source": "ui"}, {}),
        ({}, {"source": "agent"}),
        ({"source": "ui", "a": 1}, {"source": "agent", "b": 2}),
    ],
)
def test_extra_fields_dynamic_keys_win(default_extra, dynamic_extra):
    merged = merge_defaults({"extraFields": default_extra}, {"extraFields": dynamic_extra})
    assert merged["extraFields"] == {**default_extra, **dynamic_extra}


def test_fields_restrict_family():
    defaults = {"address": "A", "maturityLevel": "early"}
    assert "maturityLevel" not in merge_defaults(defaults, {}, LOCATION_FIELDS)
    assert "address" not in merge_defaults(defaults, {}, MATURITY_FIELDS)


def test_pathological_defaults_raise():
    with pytest.raises(TypeError):
        merge_defaults({"addresses": 42}, {})
