"""Property-based tests for jshape validators."""

import json

from hypothesis import given
from hypothesis import strategies as st

from jshape import (
    Anything,
    Array,
    Boolean,
    Map,
    Null,
    Number,
    Object,
    Optional,
    Or,
    String,
    WholeNumber,
    describe,
    hydrate,
)

json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers(min_value=-(10**6), max_value=10**6)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=8),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=4), children, max_size=4),
    max_leaves=20,
)

leaf_validators = st.sampled_from(
    [Anything(), String(), Number(), Boolean(), Null(), WholeNumber()]
)


@st.composite
def validators(draw, depth=2):
    """Generate small non-recursive validator trees."""
    if depth == 0:
        return draw(leaf_validators)
    child = validators(depth=depth - 1)
    kind = draw(st.sampled_from(["leaf", "array", "map", "optional", "or", "object"]))
    if kind == "array":
        return Array(draw(child))
    if kind == "map":
        return Map(draw(child))
    if kind == "optional":
        return Optional(draw(child))
    if kind == "or":
        return Or(draw(child), draw(child))
    if kind == "object":
        keys = draw(st.lists(st.text(max_size=3), max_size=3, unique=True))
        return Object({k: draw(child) for k in keys})
    return draw(leaf_validators)


@given(validators(), json_values)
def test_validate_is_deterministic(validator, value):
    assert validator.validate(value) == validator.validate(value)


@given(validators())
def test_optional_accepts_null(validator):
    assert Optional(validator).validate(None) == []


@given(validators(), json_values.filter(lambda v: v is not None))
def test_optional_behaves_like_inner_on_values(validator, value):
    assert Optional(validator).validate(value) == validator.validate(value)


@given(validators(), validators(), json_values)
def test_or_succeeds_when_first_succeeds(first, second, value):
    if first.is_valid(value):
        assert Or(first, second).validate(value) == []


@given(validators(), json_values)
def test_hydrated_validator_accepts_same_values(validator, value):
    rebuilt = hydrate(json.loads(json.dumps(describe(validator))))
    assert rebuilt.is_valid(value) == validator.is_valid(value)
    assert rebuilt.validate(value) == validator.validate(value)
