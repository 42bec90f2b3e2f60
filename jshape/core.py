"""
Core validator classes for jshape.

Provides the Validator base, the logical combinators (and/or) with their
aggregation policy, the recursive placeholder, and schema coercion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .errors import SchemaError, ValidationFailed
from .types import Err, Ok, Path, Reason, Violation, Violations

logger = logging.getLogger(__name__)


class Validator:
    """
    Base of every validator node.

    Subclasses implement ``validate``; everything else (result wrapping,
    composition operators, traversal and description) is shared.
    """

    __slots__ = ()

    # Whether a missing object key satisfies this validator.
    accepts_absent = False

    def validate(self, value: Any, path: Path = ()) -> Violations:
        """Return the violations of ``value`` (empty when it is valid)."""
        raise NotImplementedError

    def __call__(self, value: Any, path: Path = ()) -> Ok[Any] | Err[Violations]:
        """
        Validate a value.

        Returns:
            Ok(value) if validation passes
            Err([Violation, ...]) if validation fails
        """
        violations = self.validate(value, path)
        return Err(violations) if violations else Ok(value)

    def is_valid(self, value: Any) -> bool:
        return not self.validate(value)

    def assert_valid(self, value: Any) -> Any:
        """Return ``value`` unchanged, or raise ValidationFailed."""
        violations = self.validate(value)
        if violations:
            raise ValidationFailed(violations)
        return value

    def traverse(self, value: Any, visitor: Callable[[Any, Validator], Any]) -> None:
        from .traverse import traverse

        traverse(self, value, visitor)

    def describe(self) -> list:
        from .describe import describe

        return describe(self)

    def to_json(self, **kwargs: Any) -> str:
        from .describe import to_json

        return to_json(self, **kwargs)

    def __and__(self, other: Validator | type | Any) -> AndV:
        """
        Combine with AND logic: all must pass.

        Usage:
            String() & LengthBetween(1, 10)
            str & Regex("^a")
        """
        return AndV((*_operands(self, AndV), *_operands(to_validator(other), AndV)))

    def __rand__(self, other: type | Any) -> AndV:
        return to_validator(other) & self

    def __or__(self, other: Validator | type | Any) -> OrV:
        """
        Combine with OR logic: at least one must pass.

        Usage:
            String() | Null()
            str | int
        """
        return OrV((*_operands(self, OrV), *_operands(to_validator(other), OrV)))

    def __ror__(self, other: type | Any) -> OrV:
        return to_validator(other) | self


def _operands(v: Validator, kind: type) -> tuple[Validator, ...]:
    if isinstance(v, kind):
        return v.validators
    return (v,)


def collapse(reason: Reason, path: Path, violations: Violations) -> Violations:
    """
    Merge the violations gathered by an and/or node.

    Aggregates of the same kind are spliced in one level, duplicates (same
    reason and path) are dropped keeping the first occurrence, and more than
    one survivor is wrapped into a single aggregate violation.
    """
    flat: Violations = []
    for v in violations:
        if v.reason == reason.value:
            flat.extend(v.violations)
        else:
            flat.append(v)

    # dict preserves insertion order and keeps the first equal key
    unique = list(dict.fromkeys(flat))
    if len(unique) <= 1:
        return unique
    return [Violation(reason, path, unique)]


@dataclass(frozen=True, slots=True)
class AndV(Validator):
    """All children must pass. Every child runs so the full failure set is reported."""

    validators: tuple[Validator, ...]

    def __post_init__(self) -> None:
        if not self.validators:
            raise SchemaError("And() requires at least one validator")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        found: Violations = []
        for v in self.validators:
            found.extend(v.validate(value, path))
        return collapse(Reason.AND, path, found)


@dataclass(frozen=True, slots=True)
class OrV(Validator):
    """At least one child must pass; stops at the first that does."""

    validators: tuple[Validator, ...]

    def __post_init__(self) -> None:
        if not self.validators:
            raise SchemaError("Or() requires at least one validator")

    def validate(self, value: Any, path: Path = ()) -> Violations:
        found: Violations = []
        for v in self.validators:
            errors = v.validate(value, path)
            if not errors:
                return []
            found.extend(errors)
        return collapse(Reason.OR, path, found)


def And(*validators: Validator | type | Any) -> AndV:
    """
    Conjunction of validators.

    Usage:
        And(String(), Regex("^[a-z]+$"), LengthBetween(1, 32))
    """
    return AndV(tuple(to_validator(v) for v in validators))


def Or(*validators: Validator | type | Any) -> OrV:
    """
    Disjunction of validators.

    Usage:
        Or(String(), Null())
    """
    return OrV(tuple(to_validator(v) for v in validators))


@dataclass(eq=False)
class RecursiveV(Validator):
    """
    Placeholder for a self-referential schema.

    Built in two steps: create the handle, use it inside the body, then
    ``define`` the body. Validation recurses only as deep as the value does.
    Equality is identity, since the graph behind it may be cyclic.
    """

    body: Validator | None = None

    def define(self, body: Validator | type | Any) -> RecursiveV:
        if self.body is not None:
            raise SchemaError("Recursive validator is already defined")
        body = to_validator(body)
        if _reaches_without_consuming(body, self):
            raise SchemaError(
                "Recursive validator refers to itself without descending into the value"
            )
        self.body = body
        logger.debug("Defined recursive validator %#x", id(self))
        return self

    @property
    def target(self) -> Validator:
        if self.body is None:
            raise SchemaError("Recursive validator used before define()")
        return self.body

    def validate(self, value: Any, path: Path = ()) -> Violations:
        return self.target.validate(value, path)

    def __repr__(self) -> str:
        state = "defined" if self.body is not None else "undefined"
        return f"RecursiveV<{id(self):#x} {state}>"


def _reaches_without_consuming(start: Validator, node: RecursiveV) -> bool:
    """
    Whether ``node`` is reachable from ``start`` through logical, optional
    and recursive nodes only, i.e. at the same value position.
    """
    from .structures import OptionalV

    pending = [start]
    seen: set[int] = set()
    while pending:
        v = pending.pop()
        if v is node:
            return True
        if id(v) in seen:
            continue
        seen.add(id(v))
        match v:
            case AndV(validators=children) | OrV(validators=children):
                pending.extend(children)
            case OptionalV(inner=child):
                pending.append(child)
            case RecursiveV(body=body) if body is not None:
                pending.append(body)
    return False


def Recursive() -> RecursiveV:
    """
    Allocate an undefined recursive handle.

    Usage:
        node = Recursive()
        node.define(Or(String(), Array(node)))
    """
    return RecursiveV()


def recursive(build: Callable[[RecursiveV], Validator | type | Any]) -> RecursiveV:
    """
    Build a recursive validator from a function of its own handle.

    Usage:
        nested = recursive(lambda self: Or(String(), Array(self)))
    """
    handle = RecursiveV()
    return handle.define(build(handle))


def to_validator(v: Any) -> Validator:
    """
    Coerce a schema shorthand to a validator.

    Conversion rules:
        Validator -> pass through
        str / bool / int / float -> String / Boolean / WholeNumber / Number
        None / type(None) -> Null
        dict -> Object with recursive conversion
        list -> Array with item validator from list[0] (several items: Or)
        tuple -> Tuple with positional conversion
    """
    from .structures import Array, Object, Tuple
    from .validators import Boolean, Null, Number, String, WholeNumber

    if isinstance(v, Validator):
        return v

    if v is None:
        return Null()

    if isinstance(v, type):
        factories = {
            str: String,
            bool: Boolean,
            int: WholeNumber,
            float: Number,
            type(None): Null,
        }
        if v in factories:
            return factories[v]()
        raise SchemaError(f"No validator for type {v.__name__}")

    if isinstance(v, dict):
        return Object(v)

    if isinstance(v, list):
        if len(v) == 0:
            raise SchemaError("Empty list cannot be converted to validator")
        if len(v) == 1:
            return Array(v[0])
        return Array(Or(*v))

    if isinstance(v, tuple):
        return Tuple(*v)

    raise SchemaError(f"Cannot convert {type(v).__name__} to validator")
