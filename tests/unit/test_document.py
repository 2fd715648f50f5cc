# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from sarifmark.document import (
    first_item,
    get_array,
    get_int,
    get_node,
    get_string,
    has_member,
)


def test_doc_001_get_node_walks_nested_members() -> None:
    node = {"a": {"b": {"c": 3}}}

    assert get_node(node, "a", "b", "c") == 3
    assert get_node(node, "a", "missing", "c") is None


def test_doc_002_get_node_stops_at_non_object_values() -> None:
    assert get_node({"a": [1, 2]}, "a", "b") is None
    assert get_node("text", "a") is None
    assert get_node(None, "a") is None


def test_doc_003_typed_getters_return_none_for_wrong_types() -> None:
    node = {"s": "value", "i": 7, "b": True, "f": 1.5, "l": [1]}

    assert get_string(node, "s") == "value"
    assert get_string(node, "i") is None
    assert get_int(node, "i") == 7
    assert get_int(node, "b") is None
    assert get_int(node, "f") is None
    assert get_array(node, "l") == [1]
    assert get_array(node, "s") is None


def test_doc_004_first_item_and_has_member() -> None:
    assert first_item([{"x": 1}, {"x": 2}]) == {"x": 1}
    assert first_item([]) is None
    assert first_item(None) is None
    assert has_member({"version": None}, "version")
    assert not has_member(["version"], "version")
