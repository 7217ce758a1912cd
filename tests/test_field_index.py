from formmapper.model.catalog import LEGACY_FIELD_INDEX
from formmapper.state.field_index import index_drift, merge_field_index, ordered_names

LEGACY = {"partyName": 0, "caseNumber": 20}


def test_new_names_follow_highest_legacy_index():
    merged = merge_field_index(LEGACY, ["partyName", "newField"])

    assert merged == {"partyName": 0, "caseNumber": 20, "newField": 21}


def test_merge_is_idempotent():
    names = ["partyName", "newField"]
    once = merge_field_index(LEGACY, names)

    assert merge_field_index(once, names) == once
    assert merge_field_index(LEGACY, names) == once


def test_assigns_in_encounter_order():
    merged = merge_field_index(LEGACY, ["a", "b", "c"])

    assert (merged["a"], merged["b"], merged["c"]) == (21, 22, 23)


def test_legacy_entries_are_never_reindexed():
    merged = merge_field_index(LEGACY_FIELD_INDEX, ["caseNumber", "extra", "partyName"])

    for name, index in LEGACY_FIELD_INDEX.items():
        assert merged[name] == index
    assert merged["extra"] == 64


def test_duplicates_are_assigned_once():
    merged = merge_field_index(LEGACY, ["x", "y", "x", "y", "z"])

    assert merged["x"] == 21
    assert merged["y"] == 22
    assert merged["z"] == 23


def test_input_map_is_not_mutated():
    legacy = dict(LEGACY)
    merge_field_index(legacy, ["other"])

    assert legacy == LEGACY


def test_empty_or_missing_dynamic_names_returns_copy():
    for dynamic in (None, [], ()):
        merged = merge_field_index(LEGACY, dynamic)
        assert merged == LEGACY
        assert merged is not LEGACY


def test_empty_legacy_starts_at_zero():
    assert merge_field_index({}, ["a", "b"]) == {"a": 0, "b": 1}


def test_wrong_input_types_are_treated_as_empty():
    assert merge_field_index(LEGACY, "newField") == LEGACY
    assert merge_field_index(LEGACY, {"newField": 1}) == LEGACY
    assert merge_field_index(LEGACY, 42) == LEGACY
    assert merge_field_index(None, ["a"]) == {"a": 0}
    assert merge_field_index(LEGACY, ["a", None, 3, "b"]) == {**LEGACY, "a": 21, "b": 22}


def test_ordered_names_sorts_by_index():
    merged = merge_field_index(LEGACY, ["z", "m"])

    assert ordered_names(merged) == ["partyName", "caseNumber", "z", "m"]


def test_index_drift_reports_reordered_dynamic_names():
    first = merge_field_index(LEGACY, ["a", "b"])
    second = merge_field_index(LEGACY, ["b", "a"])

    assert index_drift(first, second) == {"a": (21, 22), "b": (22, 21)}
    assert index_drift(first, first) == {}
