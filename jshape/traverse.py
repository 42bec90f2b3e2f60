"""
Pair every position of a value with the validator responsible for it.
"""

from __future__ import annotations

from typing import Any, Callable

from . import value as vm
from .core import AndV, OrV, RecursiveV, Validator
from .structures import ArrayV, CaseV, MapV, ObjectV, OptionalV, TupleV
from .types import Path

Visitor = Callable[[Any, Validator], Any]


def traverse(validator: Validator, value: Any, visitor: Visitor) -> None:
    """
    Walk ``value`` alongside ``validator``, calling ``visitor(sub_value,
    sub_validator)`` pre-order at every node.

    Structural validators descend only where the value has their shape:
    missing object keys, unknown case keys and out-of-range tuple positions
    are skipped, and a null under Optional is not descended into. Logical
    validators visit every child against the same value.

    A recursive validator re-entered at the same path (without consuming
    any of the value) is not visited again.
    """
    _walk(validator, value, visitor, (), set())


def _walk(
    validator: Validator,
    value: Any,
    visitor: Visitor,
    path: Path,
    visiting: set[tuple[int, Path]],
) -> None:
    if isinstance(validator, RecursiveV) and (id(validator), path) in visiting:
        return

    visitor(value, validator)

    match validator:
        case AndV(validators=children) | OrV(validators=children):
            for child in children:
                _walk(child, value, visitor, path, visiting)

        case ObjectV(fields=fields):
            if vm.is_object(value):
                for key, child in fields.items():
                    if vm.object_has(value, key):
                        item = vm.object_get(value, key)
                        _walk(child, item, visitor, (*path, key), visiting)

        case MapV(values=child):
            if vm.is_object(value):
                for key, item in vm.object_items(value):
                    _walk(child, item, visitor, (*path, str(key)), visiting)

        case ArrayV(items=child):
            if vm.is_array(value):
                for i in range(vm.array_length(value)):
                    item = vm.array_get(value, i)
                    _walk(child, item, visitor, (*path, str(i)), visiting)

        case TupleV(items=children):
            if vm.is_array(value):
                n = min(len(children), vm.array_length(value))
                for i in range(n):
                    item = vm.array_get(value, i)
                    _walk(children[i], item, visitor, (*path, str(i)), visiting)

        case OptionalV(inner=child):
            if not vm.is_null(value):
                _walk(child, value, visitor, path, visiting)

        case CaseV(cases=cases):
            if vm.is_object(value):
                keys = vm.object_keys(value)
                if len(keys) == 1 and keys[0] in cases:
                    key = keys[0]
                    item = vm.object_get(value, key)
                    _walk(cases[key], item, visitor, (*path, str(key)), visiting)

        case RecursiveV():
            marker = (id(validator), path)
            visiting.add(marker)
            try:
                _walk(validator.target, value, visitor, path, visiting)
            finally:
                visiting.discard(marker)
