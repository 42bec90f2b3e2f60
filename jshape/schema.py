"""
Schema operations for jshape.

Provides check() and to_pydantic() functions.
"""

from __future__ import annotations

from typing import Any
from typing import Optional as TypingOptional

from pydantic import ConfigDict, create_model

from .core import Validator, to_validator
from .errors import SchemaError
from .structures import ArrayV, MapV, ObjectV, OptionalV
from .types import Err, Ok, Path, Violations
from .validators import NumberBetweenV, RegexV, TypeV, WholeNumberBetweenV, WholeNumberV


def check(value: Any, schema: Any, path: Path = ()) -> Ok[Any] | Err[Violations]:
    """
    Validate a value against a schema.

    Args:
        value: The value to validate
        schema: A Validator or a shorthand accepted by ``to_validator``
        path: Path prefix reported on violations

    Returns:
        Ok(value) if validation passes
        Err([Violation, ...]) if validation fails

    Usage:
        schema = {
            "name": String(),
            "email": Optional(Regex("@")),
            "age": WholeNumber(0, 150),
        }
        result = check({"name": "Alice", "age": 30}, schema)
    """
    return to_validator(schema)(value, path)


def to_pydantic(name: str, schema: Any) -> type:
    """
    Compile an object schema to a Pydantic model.

    Only the shape is carried over (types, optionality, nesting, closed key
    set); value constraints such as ranges and regexes are not.

    Args:
        name: Name of the generated model class
        schema: An Object validator or a dict shorthand

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", {
            "name": String(),
            "email": Optional(String()),
        })
        user = User(name="Alice")
    """
    validator = to_validator(schema)
    if not isinstance(validator, ObjectV):
        raise SchemaError("Schema must be an object")
    return _object_model(name, validator)


def _object_model(name: str, validator: ObjectV) -> type:
    fields: dict[str, Any] = {}

    for key, v in validator.fields.items():
        field_type, default = _extract_pydantic_field(f"{name}_{key}", v)
        fields[key] = (field_type, default)

    return create_model(name, __config__=ConfigDict(extra="forbid"), **fields)


def _extract_pydantic_field(name: str, v: Validator) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from validator."""
    match v:
        case OptionalV(inner=inner):
            inner_type, _ = _extract_pydantic_field(name, inner)
            return (TypingOptional[inner_type], None)
        case TypeV(kind="string") | RegexV():
            return (str, ...)
        case TypeV(kind="boolean"):
            return (bool, ...)
        case TypeV(kind="null"):
            return (type(None), ...)
        case WholeNumberV() | WholeNumberBetweenV():
            return (int, ...)
        case TypeV(kind="number") | NumberBetweenV():
            return (float, ...)
        case ObjectV():
            return (_object_model(name, v), ...)
        case ArrayV(items=items):
            item_type, _ = _extract_pydantic_field(name, items)
            return (list[item_type], ...)  # type: ignore[valid-type]
        case MapV(values=values):
            value_type, _ = _extract_pydantic_field(name, values)
            return (dict[str, value_type], ...)  # type: ignore[valid-type]

    return (Any, ...)
