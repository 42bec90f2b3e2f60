"""
Structural validators for jshape: objects, maps, arrays, tuples, optional
values and discriminated unions (case).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from . import value as vm
from .core import Validator, to_validator
from .errors import SchemaError
from .types import Path, Reason, Violation, Violations


@dataclass(frozen=True, slots=True)
class ObjectV(Validator):
    """
    Validator for objects with a closed key set.

    Every key failure is reported: unknown keys first (in value order), then
    missing or invalid declared keys (in declaration order). Unknown and
    missing keys are reported at ``path + (key,)`` with ``{"key": key}`` as
    context.
    """

    fields: Mapping[str, Validator]

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_object(value):
            return [Violation(Reason.MUST_BE_OBJECT, path)]

        errors: Violations = []

        for key in vm.object_keys(value):
            if key not in self.fields:
                errors.append(
                    Violation(Reason.UNEXPECTED_KEY, (*path, str(key)), {"key": key})
                )

        for key, validator in self.fields.items():
            field_path = (*path, key)
            if not vm.object_has(value, key):
                if not validator.accepts_absent:
                    errors.append(
                        Violation(Reason.MISSING_KEY, field_path, {"key": key})
                    )
                continue
            errors.extend(validator.validate(vm.object_get(value, key), field_path))

        return errors


@dataclass(frozen=True, slots=True)
class MapV(Validator):
    """Validator for objects with arbitrary keys and homogeneous values."""

    values: Validator

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_object(value):
            return [Violation(Reason.MUST_BE_OBJECT, path)]

        errors: Violations = []
        for key, item in vm.object_items(value):
            errors.extend(self.values.validate(item, (*path, str(key))))
        return errors


@dataclass(frozen=True, slots=True)
class ArrayV(Validator):
    """Validator for arrays with homogeneous elements."""

    items: Validator

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_array(value):
            return [Violation(Reason.MUST_BE_ARRAY, path)]

        errors: Violations = []
        for i in range(vm.array_length(value)):
            errors.extend(self.items.validate(vm.array_get(value, i), (*path, str(i))))
        return errors


@dataclass(frozen=True, slots=True)
class TupleV(Validator):
    """
    Validator for fixed-length arrays with positional element validators.

    Checks run in order (array, then length, then positions) and stop at the
    first failing element, unlike ObjectV which reports every key.
    """

    items: tuple[Validator, ...]

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_array(value):
            return [Violation(Reason.MUST_BE_ARRAY, path)]

        n = len(self.items)
        if vm.array_length(value) != n:
            return [Violation(Reason.MUST_HAVE_LENGTH, path, {"length": n})]

        for i, validator in enumerate(self.items):
            errors = validator.validate(vm.array_get(value, i), (*path, str(i)))
            if errors:
                return errors
        return []


@dataclass(frozen=True, slots=True)
class OptionalV(Validator):
    """Null (or a missing object key) passes; anything else goes to ``inner``."""

    inner: Validator

    accepts_absent = True

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if vm.is_null(value):
            return []
        return self.inner.validate(value, path)


@dataclass(frozen=True, slots=True)
class CaseV(Validator):
    """
    Discriminated union keyed by the sole key of an object.

    ``{"circle": {"r": 1}}`` selects ``cases["circle"]`` and validates
    ``{"r": 1}`` against it at ``path + ("circle",)``.
    """

    cases: Mapping[str, Validator]

    def __post_init__(self) -> None:
        if not self.cases:
            raise SchemaError("Case() requires at least one case")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_object(value):
            return [Violation(Reason.MUST_BE_OBJECT, path)]

        keys = vm.object_keys(value)
        if len(keys) != 1:
            return [Violation(Reason.EXACTLY_ONE_KEY, path, {"keys": len(keys)})]

        key = keys[0]
        if key not in self.cases:
            return [Violation(Reason.CASE_NOT_DEFINED, path, {"case": key})]

        return self.cases[key].validate(vm.object_get(value, key), (*path, str(key)))


def Object(fields: Mapping[str, Any] | None = None, **kwargs: Any) -> ObjectV:
    """
    Validate an object with exactly the given keys.

    Usage:
        Object({"name": String(), "age": Optional(WholeNumber())})
        Object(name=str, tags=[str])
    """
    merged = {**(fields or {}), **kwargs}
    return ObjectV({k: to_validator(v) for k, v in merged.items()})


def Map(values: Any) -> MapV:
    """Validate an object whose every value matches ``values``."""
    return MapV(to_validator(values))


def Array(items: Any) -> ArrayV:
    """Validate an array whose every element matches ``items``."""
    return ArrayV(to_validator(items))


def Tuple(*items: Any) -> TupleV:
    """
    Validate a fixed-length array, element by element.

    Usage:
        Tuple(String(), Number())   # ["x", 1.5]
    """
    return TupleV(tuple(to_validator(v) for v in items))


def Optional(inner: Any) -> OptionalV:
    """
    Allow null (or absence as an object field), validate if present.

    Usage:
        Optional(String())
    """
    return OptionalV(to_validator(inner))


def Case(cases: Mapping[str, Any] | None = None, **kwargs: Any) -> CaseV:
    """
    Discriminated union on the single key of an object.

    Usage:
        shape = Case({
            "circle": Object(r=Number()),
            "rect": Object(w=Number(), h=Number()),
        })
        shape.validate({"circle": {"r": 2}})   # []
    """
    merged = {**(cases or {}), **kwargs}
    return CaseV({k: to_validator(v) for k, v in merged.items()})
