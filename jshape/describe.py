"""
Introspection for jshape: turn a validator tree into a serializable
description and back.

Every node is encoded as ``[tag, [args...]]``:

    ["object", [{"name": ["string", []], "tags": ["array", [["string", []]]]}]]

Recursive validators are written once as ``["recursion", [id, body]]`` and
referred to from inside their own body as ``["recurse", [id]]``.
An open range bound (as in ``WholeNumber(lower=1)``) is written as ``null``.
"""

from __future__ import annotations

import json
import logging
import math
from contextlib import contextmanager
from typing import Any, Iterator

from .core import AndV, OrV, RecursiveV, Validator
from .errors import SchemaError
from .structures import ArrayV, CaseV, MapV, ObjectV, OptionalV, TupleV
from .types import Reason
from .validators import (
    AnythingV,
    ExactlyV,
    LengthV,
    NumberBetweenV,
    RegexV,
    TypeV,
    WholeNumberBetweenV,
    WholeNumberV,
    json_bound,
)

logger = logging.getLogger(__name__)

TYPE_TAGS = ("string", "number", "boolean", "null", "notNull")
WILDCARD = "*"


class _Scope:
    """Recursive nodes on the current descent path, keyed by identity."""

    def __init__(self) -> None:
        self.active: dict[int, int] = {}
        self.next_id = 1

    def lookup(self, node: RecursiveV) -> int | None:
        return self.active.get(id(node))

    @contextmanager
    def define(self, node: RecursiveV) -> Iterator[int]:
        rid = self.next_id
        self.next_id += 1
        self.active[id(node)] = rid
        try:
            yield rid
        finally:
            del self.active[id(node)]


def describe(validator: Validator) -> list:
    """
    Render a validator tree as a JSON-compatible description.

    Usage:
        describe(Object(name=String()))
        # ["object", [{"name": ["string", []]}]]
    """
    return _describe(validator, _Scope())


def _describe(v: Validator, scope: _Scope) -> list:
    match v:
        case AnythingV():
            return ["anything", []]
        case TypeV(kind=kind):
            return [kind, []]
        case ExactlyV(literal=literal):
            return ["exactly", [literal]]
        case RegexV():
            return ["regex", [v.pattern, _regex_options(v)]]
        case LengthV(min=lower, max=upper):
            return ["lengthBetween", [lower, upper]]
        case NumberBetweenV(min=lower, max=upper):
            return ["numberBetween", [json_bound(lower), json_bound(upper)]]
        case WholeNumberV():
            return ["wholeNumber", []]
        case WholeNumberBetweenV(min=lower, max=upper):
            return ["wholeNumberBetween", [json_bound(lower), json_bound(upper)]]
        case AndV(validators=children):
            return ["and", [_describe(c, scope) for c in children]]
        case OrV(validators=children):
            return ["or", [_describe(c, scope) for c in children]]
        case TupleV(items=children):
            return ["tuple", [_describe(c, scope) for c in children]]
        case ObjectV(fields=fields):
            return ["object", [{k: _describe(c, scope) for k, c in fields.items()}]]
        case CaseV(cases=cases):
            return ["case", [{k: _describe(c, scope) for k, c in cases.items()}]]
        case MapV(values=child):
            return ["map", [_describe(child, scope)]]
        case ArrayV(items=child):
            return ["array", [_describe(child, scope)]]
        case OptionalV(inner=child):
            return ["optional", [_describe(child, scope)]]
        case RecursiveV():
            rid = scope.lookup(v)
            if rid is not None:
                return ["recurse", [rid]]
            with scope.define(v) as rid:
                return ["recursion", [rid, _describe(v.target, scope)]]

    raise SchemaError(f"Cannot describe {type(v).__name__}")


def _regex_options(v: RegexV) -> dict:
    return {
        "ignoreCase": v.ignore_case,
        "multiline": v.multiline,
        "reason": v.reason,
    }


def to_json(validator: Validator, **kwargs: Any) -> str:
    """Description of ``validator`` encoded as a JSON string."""
    return json.dumps(describe(validator), **kwargs)


def hydrate(description: Any) -> Validator:
    """
    Rebuild a validator from its description (as produced by ``describe``,
    possibly round-tripped through JSON).

    Raises:
        SchemaError: if the description is malformed
    """
    return _hydrate(description, {})


def _hydrate(d: Any, scope: dict[int, RecursiveV]) -> Validator:
    match d:
        case [str() as tag, list() | tuple() as args]:
            pass
        case _:
            raise SchemaError(f"Malformed description node: {d!r}")

    def children(items: Any) -> tuple[Validator, ...]:
        return tuple(_hydrate(c, scope) for c in items)

    def keyed(items: dict) -> dict[str, Validator]:
        return {k: _hydrate(c, scope) for k, c in items.items()}

    match tag, list(args):
        case "anything", []:
            return AnythingV()
        case (tag, []) if tag in TYPE_TAGS:
            return TypeV(tag)
        case "exactly", [literal]:
            return ExactlyV(literal)
        case "regex", [str() as pattern]:
            return RegexV(pattern)
        case "regex", [str() as pattern, dict() as options]:
            return RegexV(
                pattern,
                ignore_case=bool(options.get("ignoreCase", False)),
                multiline=bool(options.get("multiline", False)),
                reason=options.get("reason") or Reason.MUST_MATCH_REGEX.value,
            )
        case "lengthBetween", [int() as lower, int() as upper]:
            return LengthV(lower, upper)
        case "numberBetween", [lower, upper] if _are_bounds(lower, upper):
            return NumberBetweenV(*_open_bounds(lower, upper))
        case "wholeNumber", []:
            return WholeNumberV()
        case "wholeNumberBetween", [lower, upper] if _are_bounds(lower, upper):
            return WholeNumberBetweenV(*_open_bounds(lower, upper))
        case "and", items:
            return AndV(children(items))
        case "or", items:
            return OrV(children(items))
        case "tuple", items:
            return TupleV(children(items))
        case "object", [dict() as fields]:
            return ObjectV(keyed(fields))
        case "case", [dict() as cases]:
            return CaseV(keyed(cases))
        case "map", [child]:
            return MapV(_hydrate(child, scope))
        case "array", [child]:
            return ArrayV(_hydrate(child, scope))
        case "optional", [child]:
            return OptionalV(_hydrate(child, scope))
        case "recursion", [int() as rid, body]:
            handle = RecursiveV()
            handle.define(_hydrate(body, {**scope, rid: handle}))
            logger.debug("Hydrated recursive definition %d", rid)
            return handle
        case "recurse", [int() as rid]:
            if rid not in scope:
                raise SchemaError(f"Reference to undefined recursion {rid}")
            return scope[rid]

    raise SchemaError(f"Malformed description node: {d!r}")


def _are_bounds(*bounds: Any) -> bool:
    return all(
        b is None or (isinstance(b, (int, float)) and not isinstance(b, bool))
        for b in bounds
    )


def _open_bounds(lower: float | None, upper: float | None) -> tuple[float, float]:
    # null stands for an unbounded side
    return (
        -math.inf if lower is None else lower,
        math.inf if upper is None else upper,
    )


def constraint_expression(validator: Validator) -> Any:
    """
    Render a validator tree as a boolean constraint expression.

    Leaves become ``{"pred": tag, "args": [...]}`` (``True`` for anything),
    logical nodes become ``{"and": [...]}`` / ``{"or": [...]}``, and
    structural nodes become a conjunction of their shape predicate with
    ``{"at": key, "expr": ...}`` children, keyed by field name (object,
    case, tuple position) or by ``"*"`` (array and map elements).
    Recursion is written as ``{"let": id, "expr": ...}`` / ``{"ref": id}``.
    """
    return _expr(validator, _Scope())


def _pred(tag: str, *args: Any) -> dict:
    return {"pred": tag, "args": list(args)}


def _at(key: str, expr: Any) -> dict:
    return {"at": key, "expr": expr}


def _expr(v: Validator, scope: _Scope) -> Any:
    match v:
        case AnythingV():
            return True
        case TypeV(kind=kind):
            return _pred(kind)
        case ExactlyV(literal=literal):
            return _pred("exactly", literal)
        case RegexV():
            return _pred("regex", v.pattern, _regex_options(v))
        case LengthV(min=lower, max=upper):
            return _pred("lengthBetween", lower, upper)
        case NumberBetweenV(min=lower, max=upper):
            return _pred("numberBetween", json_bound(lower), json_bound(upper))
        case WholeNumberV():
            return _pred("wholeNumber")
        case WholeNumberBetweenV(min=lower, max=upper):
            return _pred("wholeNumberBetween", json_bound(lower), json_bound(upper))
        case AndV(validators=children):
            return {"and": [_expr(c, scope) for c in children]}
        case OrV(validators=children):
            return {"or": [_expr(c, scope) for c in children]}
        case ObjectV(fields=fields):
            return {
                "and": [
                    _pred("object"),
                    _pred("keys", *fields.keys()),
                    *(_at(k, _expr(c, scope)) for k, c in fields.items()),
                ]
            }
        case MapV(values=child):
            return {"and": [_pred("object"), _at(WILDCARD, _expr(child, scope))]}
        case ArrayV(items=child):
            return {"and": [_pred("array"), _at(WILDCARD, _expr(child, scope))]}
        case TupleV(items=children):
            n = len(children)
            return {
                "and": [
                    _pred("array"),
                    _pred("lengthBetween", n, n),
                    *(_at(str(i), _expr(c, scope)) for i, c in enumerate(children)),
                ]
            }
        case OptionalV(inner=child):
            return {"or": [_pred("null"), _expr(child, scope)]}
        case CaseV(cases=cases):
            return {
                "and": [
                    _pred("object"),
                    _pred("keyCount", 1),
                    {"or": [_at(k, _expr(c, scope)) for k, c in cases.items()]},
                ]
            }
        case RecursiveV():
            rid = scope.lookup(v)
            if rid is not None:
                return {"ref": rid}
            with scope.define(v) as rid:
                return {"let": rid, "expr": _expr(v.target, scope)}

    raise SchemaError(f"Cannot render {type(v).__name__}")
