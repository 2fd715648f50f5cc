# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Optional-returning accessors over decoded JSON documents."""

from typing import Any

JsonNode = Any


def has_member(node: JsonNode, key: str) -> bool:
    """Check whether an object node carries a member.

    Args:
        node: Decoded JSON value.
        key: Member name.

    Returns:
        True when ``node`` is an object containing ``key``.
    """
    return isinstance(node, dict) and key in node


def get_node(node: JsonNode, *path: str) -> JsonNode | None:
    """Walk object members along ``path``.

    Args:
        node: Decoded JSON value to start from.
        path: Member names to follow in order.

    Returns:
        The value at the end of the path, or ``None`` when any step is missing
        or crosses a non-object value.
    """
    current = node
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def get_string(node: JsonNode, *path: str) -> str | None:
    """Return the string at ``path`` or ``None`` for missing/non-string values."""
    value = get_node(node, *path)
    return value if isinstance(value, str) else None


def get_int(node: JsonNode, *path: str) -> int | None:
    """Return the integer at ``path`` or ``None``; booleans are not integers here."""
    value = get_node(node, *path)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_array(node: JsonNode, *path: str) -> list[JsonNode] | None:
    """Return the array at ``path`` or ``None`` for missing/non-array values."""
    value = get_node(node, *path)
    return value if isinstance(value, list) else None


def first_item(array: list[JsonNode] | None) -> JsonNode | None:
    """Return the first element of an array, ``None`` when empty or absent."""
    if not array:
        return None
    return array[0]
