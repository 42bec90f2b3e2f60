"""
Built-in leaf validators for jshape.

Provides type checks, exact matching, regular expressions and ranges, each
as a frozen dataclass plus a factory function.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from . import value as vm
from .core import AndV, OrV, Validator
from .errors import SchemaError
from .structures import ArrayV
from .types import Path, Reason, Violation, Violations

# kind -> (predicate, reason when it fails)
_TYPE_CHECKS = {
    "string": (vm.is_string, Reason.MUST_BE_STRING),
    "number": (vm.is_number, Reason.MUST_BE_NUMBER),
    "boolean": (vm.is_boolean, Reason.MUST_BE_BOOLEAN),
    "null": (vm.is_null, Reason.MUST_BE_NULL),
    "notNull": (lambda x: not vm.is_null(x), Reason.MUST_NOT_BE_NULL),
}


@dataclass(frozen=True, slots=True)
class AnythingV(Validator):
    """Accepts every value."""

    def validate(self, value: Any, path: Path = ()) -> Violations:
        return []


@dataclass(frozen=True, slots=True)
class TypeV(Validator):
    """Single type predicate; ``kind`` is one of string/number/boolean/null/notNull."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in _TYPE_CHECKS:
            raise SchemaError(f"Unknown type check: {self.kind!r}")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        check, reason = _TYPE_CHECKS[self.kind]
        if check(value):
            return []
        return [Violation(reason, path)]


@dataclass(frozen=True, slots=True)
class ExactlyV(Validator):
    """Accepts values deep-equal to ``literal``."""

    literal: Any

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if vm.deep_equal(value, self.literal):
            return []
        return [Violation(Reason.NOT_MATCHED_EXACTLY, path)]


@dataclass(frozen=True, slots=True)
class RegexV(Validator):
    """Strings in which ``pattern`` is found (search, not full match)."""

    pattern: str
    ignore_case: bool = False
    multiline: bool = False
    reason: str = Reason.MUST_MATCH_REGEX.value

    def __post_init__(self) -> None:
        try:
            self.compiled()
        except re.error as e:
            raise SchemaError(f"Invalid regex {self.pattern!r}: {e}") from e

    def compiled(self) -> re.Pattern:
        flags = 0
        if self.ignore_case:
            flags |= re.IGNORECASE
        if self.multiline:
            flags |= re.MULTILINE
        # re keeps its own cache of compiled patterns
        return re.compile(self.pattern, flags)

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_string(value):
            return [Violation(Reason.MUST_BE_STRING, path)]
        if self.compiled().search(value) is not None:
            return []
        return [Violation(self.reason, path, {"regex": self.pattern})]


def json_bound(bound: float) -> float | None:
    """An open (infinite) range bound as None, so it survives strict JSON."""
    return None if isinstance(bound, float) and math.isinf(bound) else bound


_STRING_OR_ARRAY = OrV((TypeV("string"), ArrayV(AnythingV())))


@dataclass(frozen=True, slots=True)
class LengthV(Validator):
    """Strings (code points) or arrays (elements) with min <= length <= max."""

    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 0:
            raise SchemaError(f"LengthBetween: negative min {self.min}")
        if self.max < self.min:
            raise SchemaError(f"LengthBetween: max {self.max} < min {self.min}")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        errors = _STRING_OR_ARRAY.validate(value, path)
        if errors:
            return errors

        if vm.is_array(value):
            n = vm.array_length(value)
        else:
            n = vm.string_length(value)
        if self.min <= n <= self.max:
            return []

        if self.min == self.max:
            return [Violation(Reason.MUST_HAVE_LENGTH, path, {"length": self.min})]
        return [
            Violation(
                Reason.MUST_HAVE_LENGTH_BETWEEN,
                path,
                {"min": self.min, "max": self.max},
            )
        ]


@dataclass(frozen=True, slots=True)
class NumberBetweenV(Validator):
    """Numbers with min <= value <= max."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.max < self.min:
            raise SchemaError(f"NumberBetween: max {self.max} < min {self.min}")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_number(value):
            return [Violation(Reason.MUST_BE_NUMBER, path)]
        if self.min <= value <= self.max:
            return []
        return [
            Violation(
                Reason.MUST_HAVE_VALUE_BETWEEN,
                path,
                {"min": json_bound(self.min), "max": json_bound(self.max)},
            )
        ]


@dataclass(frozen=True, slots=True)
class WholeNumberV(Validator):
    """Numbers without a fractional part."""

    def validate(self, value: Any, path: Path = ()) -> Violations:
        if not vm.is_number(value):
            return [Violation(Reason.MUST_BE_NUMBER, path)]
        if isinstance(value, int):
            return []
        if math.isfinite(value) and float(value).is_integer():
            return []
        return [Violation(Reason.MUST_BE_WHOLE_NUMBER, path)]


@dataclass(frozen=True, slots=True)
class WholeNumberBetweenV(Validator):
    """Whole numbers with min <= value <= max; both checks are reported."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.max < self.min:
            raise SchemaError(f"WholeNumberBetween: max {self.max} < min {self.min}")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        check = AndV((WholeNumberV(), NumberBetweenV(self.min, self.max)))
        return check.validate(value, path)


def Anything() -> AnythingV:
    return AnythingV()


def String() -> TypeV:
    return TypeV("string")


def Number() -> TypeV:
    return TypeV("number")


def Boolean() -> TypeV:
    return TypeV("boolean")


def Null() -> TypeV:
    return TypeV("null")


def NotNull() -> TypeV:
    return TypeV("notNull")


def Exactly(literal: Any) -> ExactlyV:
    """
    Validate deep equality with a literal value.

    Usage:
        Exactly("active")
        Exactly({"version": 2})
    """
    return ExactlyV(literal)


def Regex(
    pattern: str,
    ignore_case: bool = False,
    multiline: bool = False,
    reason: str | None = None,
) -> RegexV:
    """
    Validate that a string contains a match for ``pattern``.

    Usage:
        Regex(r"^[a-z]+$")
        Regex(r"^\\d{3}-\\d{4}$", reason="value_must_be_phone_number")
    """
    return RegexV(
        pattern,
        ignore_case=ignore_case,
        multiline=multiline,
        reason=reason or Reason.MUST_MATCH_REGEX.value,
    )


def LengthBetween(lower: int, upper: int) -> LengthV:
    """
    Validate string or array length is within range (inclusive).

    Usage:
        LengthBetween(1, 10)
    """
    return LengthV(lower, upper)


def Length(n: int) -> LengthV:
    """Validate exact string or array length."""
    return LengthV(n, n)


def NumberBetween(lower: float, upper: float) -> NumberBetweenV:
    """Validate a number is within range (inclusive)."""
    return NumberBetweenV(lower, upper)


def WholeNumberBetween(lower: float, upper: float) -> WholeNumberBetweenV:
    """Validate a whole number is within range (inclusive)."""
    return WholeNumberBetweenV(lower, upper)


def WholeNumber(
    lower: float | None = None, upper: float | None = None
) -> WholeNumberV | WholeNumberBetweenV:
    """
    Validate a whole number, optionally range-bound.

    Usage:
        WholeNumber()          # any integral number
        WholeNumber(0, 100)    # 0 to 100
        WholeNumber(lower=1)   # at least 1
    """
    if lower is None and upper is None:
        return WholeNumberV()
    return WholeNumberBetweenV(
        -math.inf if lower is None else lower,
        math.inf if upper is None else upper,
    )
