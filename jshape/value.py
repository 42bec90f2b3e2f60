"""
Value model: typed access to the JSON-like tree being validated.

Values are plain Python objects as produced by ``json.loads`` (or, outside
strict mode, any Mapping/Sequence/Real equivalents).
"""

from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, Iterator

from .context import is_strict


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_null(value: Any) -> bool:
    return value is None


def is_number(value: Any) -> bool:
    """Numbers exclude bool, which Python treats as an int subclass."""
    if isinstance(value, bool):
        return False
    if is_strict():
        return isinstance(value, (int, float))
    return isinstance(value, Real)


def is_object(value: Any) -> bool:
    if is_strict():
        return isinstance(value, dict)
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    if is_strict():
        return isinstance(value, list)
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def object_keys(value: Mapping) -> list[str]:
    return list(value.keys())


def object_has(value: Mapping, key: str) -> bool:
    return key in value


def object_get(value: Mapping, key: str) -> Any:
    return value.get(key)


def object_items(value: Mapping) -> Iterator[tuple[str, Any]]:
    return iter(value.items())


def array_length(value: Sequence) -> int:
    return len(value)


def array_get(value: Sequence, index: int) -> Any:
    return value[index]


def string_length(value: str) -> int:
    """Length in code points (Python strings are code-point sequences)."""
    return len(value)


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality over value trees.

    Unlike ``==``, booleans never equal numbers (``True != 1``), and
    containers are compared by kind as well as content.
    """
    if is_boolean(left) or is_boolean(right):
        return is_boolean(left) and is_boolean(right) and left == right
    if is_null(left) or is_null(right):
        return left is None and right is None
    if is_number(left) and is_number(right):
        return left == right
    if is_string(left) and is_string(right):
        return left == right
    if is_object(left) and is_object(right):
        if set(left.keys()) != set(right.keys()):
            return False
        return all(deep_equal(left[k], right[k]) for k in left)
    if is_array(left) and is_array(right):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))
    return False
