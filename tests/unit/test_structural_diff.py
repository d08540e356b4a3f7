"""Unit tests for the DeepDiff-backed structural diff."""

import json

from api_regression.comparison.structural_diff import DiffRecord, structural_diff


def test_equal_values_produce_no_records():
    value = {"a": [1, {"b": None}], "c": "x"}
    assert structural_diff(value, json.loads(json.dumps(value))) == []


def test_edited_value_reports_path_and_both_sides():
    records = structural_diff({"message": "v1"}, {"message": "v2"})

    assert records == [DiffRecord("E", ("message",), lhs="v1", rhs="v2")]
    assert records[0].to_dict() == {
        "kind": "E",
        "path": ["message"],
        "lhs": "v1",
        "rhs": "v2",
    }


def test_added_key():
    records = structural_diff({"a": 1}, {"a": 1, "b": 2})

    assert len(records) == 1
    assert records[0].kind == "N"
    assert records[0].path == ("b",)
    assert records[0].to_dict() == {"kind": "N", "path": ["b"], "rhs": 2}


def test_removed_key():
    records = structural_diff({"a": 1, "b": 2}, {"a": 1})

    assert records[0].to_dict() == {"kind": "D", "path": ["b"], "lhs": 2}


def test_disjoint_keys_are_reported_per_key():
    records = structural_diff({"a": 1}, {"b": 2})

    assert [r.to_dict() for r in records] == [
        {"kind": "D", "path": ["a"], "lhs": 1},
        {"kind": "N", "path": ["b"], "rhs": 2},
    ]


def test_nested_disjoint_keys_are_reported_per_key():
    records = structural_diff(
        {"user": {"id": 1, "name": "old"}},
        {"user": {"uuid": "x", "label": "new"}},
    )

    assert sorted((r.kind, r.path) for r in records) == [
        ("D", ("user", "id")),
        ("D", ("user", "name")),
        ("N", ("user", "label")),
        ("N", ("user", "uuid")),
    ]


def test_null_is_distinct_from_missing():
    records = structural_diff({"a": None}, {})

    assert [r.kind for r in records] == ["D"]
    assert records[0].lhs is None


def test_type_change_is_an_edit():
    records = structural_diff({"id": "1"}, {"id": 1})

    assert records[0].kind == "E"
    assert records[0].lhs == "1"
    assert records[0].rhs == 1


def test_int_and_float_of_same_value_match():
    assert structural_diff({"n": 1}, {"n": 1.0}) == []


def test_float_comparison_is_exact():
    records = structural_diff({"price": 0.1}, {"price": 0.1000000000001})
    assert [r.kind for r in records] == ["E"]


def test_array_item_added():
    records = structural_diff({"items": [1, 2]}, {"items": [1, 2, 3]})

    assert len(records) == 1
    record = records[0]
    assert record.kind == "A"
    assert record.path == ("items",)
    assert record.index == 2
    assert record.to_dict() == {
        "kind": "A",
        "path": ["items"],
        "index": 2,
        "item": {"kind": "N", "rhs": 3},
    }


def test_array_item_removed():
    records = structural_diff({"items": ["x", "y"]}, {"items": ["x"]})

    assert records[0].kind == "A"
    assert records[0].index == 1
    assert records[0].item.kind == "D"
    assert records[0].item.lhs == "y"


def test_nested_path_includes_indices():
    lhs = {"a": {"b": [{"c": 1}]}}
    rhs = {"a": {"b": [{"c": 2}]}}

    records = structural_diff(lhs, rhs)

    assert records[0].path == ("a", "b", 0, "c")


def test_array_order_matters():
    records = structural_diff([1, 2], [2, 1])
    assert records != []


def test_root_type_change_has_empty_path():
    records = structural_diff({"a": 1}, [1])

    assert records[0].kind == "E"
    assert "path" not in records[0].to_dict()


def test_records_are_ordered_by_path():
    records = structural_diff({"b": 1, "a": 1}, {"b": 2, "a": 2})
    assert [r.path for r in records] == [("a",), ("b",)]
