"""
jshape - composable validators for JSON-like values.

Usage:
    from jshape import Array, Object, Optional, String, WholeNumber

    user = Object({
        "name": String(),
        "age": Optional(WholeNumber(0, 150)),
        "tags": Array(String()),
    })

    user.validate({"name": "Alice", "tags": ["admin", 1]})
    # [Violation(reason='value_must_be_string', path=('tags', '1'), context=None)]

    user.describe()
    # ["object", [{"name": ["string", []], ...}]]
"""

from .context import validation_context
from .core import (
    And,
    AndV,
    Or,
    OrV,
    Recursive,
    RecursiveV,
    Validator,
    recursive,
    to_validator,
)
from .describe import constraint_expression, describe, hydrate, to_json
from .errors import SchemaError, ValidationFailed
from .schema import check, to_pydantic
from .structures import (
    Array,
    ArrayV,
    Case,
    CaseV,
    Map,
    MapV,
    Object,
    ObjectV,
    Optional,
    OptionalV,
    Tuple,
    TupleV,
)
from .traverse import traverse
from .types import Err, Ok, Reason, Violation
from .validators import (
    Anything,
    AnythingV,
    Boolean,
    Exactly,
    ExactlyV,
    Length,
    LengthBetween,
    LengthV,
    NotNull,
    Null,
    Number,
    NumberBetween,
    NumberBetweenV,
    Regex,
    RegexV,
    String,
    TypeV,
    WholeNumber,
    WholeNumberBetween,
    WholeNumberBetweenV,
    WholeNumberV,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Violation",
    "Reason",
    # Errors
    "SchemaError",
    "ValidationFailed",
    # Core
    "Validator",
    "to_validator",
    "validation_context",
    # Leaf validators
    "Anything",
    "String",
    "Number",
    "Boolean",
    "Null",
    "NotNull",
    "Exactly",
    "Regex",
    "Length",
    "LengthBetween",
    "NumberBetween",
    "WholeNumber",
    "WholeNumberBetween",
    # Combinators
    "And",
    "Or",
    "Object",
    "Map",
    "Array",
    "Tuple",
    "Optional",
    "Case",
    "Recursive",
    "recursive",
    # Node classes
    "AnythingV",
    "TypeV",
    "ExactlyV",
    "RegexV",
    "LengthV",
    "NumberBetweenV",
    "WholeNumberV",
    "WholeNumberBetweenV",
    "AndV",
    "OrV",
    "ObjectV",
    "MapV",
    "ArrayV",
    "TupleV",
    "OptionalV",
    "CaseV",
    "RecursiveV",
    # Tree walks
    "traverse",
    "describe",
    "to_json",
    "hydrate",
    "constraint_expression",
    # Schema
    "check",
    "to_pydantic",
]
