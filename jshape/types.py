"""
Type definitions for jshape.

Provides the Violation record, the reason-code vocabulary, and a minimal
Result type (Ok/Err).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class Reason(str, Enum):
    """Stable, machine-checkable reason codes."""

    MUST_BE_STRING = "value_must_be_string"
    MUST_BE_NUMBER = "value_must_be_number"
    MUST_BE_BOOLEAN = "value_must_be_boolean"
    MUST_BE_NULL = "value_must_be_null"
    MUST_NOT_BE_NULL = "value_must_not_be_null"
    MUST_BE_OBJECT = "value_must_be_object"
    MUST_BE_ARRAY = "value_must_be_array"
    UNEXPECTED_KEY = "unexpected_object_key"
    MISSING_KEY = "missing_object_key"
    MUST_HAVE_LENGTH = "value_must_have_length"
    MUST_HAVE_LENGTH_BETWEEN = "value_must_have_length_between"
    MUST_HAVE_VALUE_BETWEEN = "value_must_have_value_between"
    MUST_BE_WHOLE_NUMBER = "value_must_be_whole_number"
    NOT_MATCHED_EXACTLY = "value_not_matched_exactly"
    MUST_MATCH_REGEX = "value_must_match_regex"
    EXACTLY_ONE_KEY = "object_must_have_exactly_one_key"
    CASE_NOT_DEFINED = "case_not_defined"
    AND = "and"
    OR = "or"


AGGREGATE_REASONS = frozenset({Reason.AND.value, Reason.OR.value})


@dataclass(frozen=True, slots=True)
class Violation:
    """
    A single diagnostic: what rule failed, where, and with what detail.

    Equality (and hashing) considers only ``reason`` and ``path``. The
    ``context`` may hold nested violation lists, which are not comparable in
    any useful way, so it never takes part in deduplication.
    """

    reason: str
    path: Path = ()
    context: Any = dataclasses.field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Reason members hash by name, not value; store the plain string.
        if isinstance(self.reason, Reason):
            object.__setattr__(self, "reason", self.reason.value)
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    @property
    def field(self) -> str:
        """Path rendered as a dotted string, e.g. ``"items.0.name"``."""
        return ".".join(self.path)

    @property
    def is_aggregate(self) -> bool:
        return self.reason in AGGREGATE_REASONS

    @property
    def violations(self) -> tuple[Violation, ...]:
        """Nested violations of an ``and``/``or`` aggregate."""
        if self.is_aggregate and self.context is not None:
            return tuple(self.context)
        return ()

    def __str__(self) -> str:
        where = self.field or "<root>"
        if self.is_aggregate:
            inner = ", ".join(str(v) for v in self.violations)
            return f"{where}: {self.reason}({inner})"
        return f"{where}: {self.reason}"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


# Type aliases
Path = tuple[str, ...]
Violations = list[Violation]
