"""
Tests for schema helpers, coercion, configuration and errors.
"""

from collections import OrderedDict

import pytest

from jshape import (
    Array,
    ArrayV,
    Err,
    Map,
    Number,
    NumberBetween,
    Object,
    ObjectV,
    Ok,
    Optional,
    OrV,
    Regex,
    SchemaError,
    String,
    TupleV,
    TypeV,
    ValidationFailed,
    Violation,
    WholeNumber,
    check,
    to_pydantic,
    to_validator,
    validation_context,
)


class TestCheck:
    def test_simple_schema(self):
        schema = {"name": str, "age": int}
        assert isinstance(check({"name": "Alice", "age": 30}, schema), Ok)
        result = check({"name": 123, "age": 30}, schema)
        assert isinstance(result, Err)
        assert result.error == [Violation("value_must_be_string", ("name",))]

    def test_path_prefix(self):
        result = check(1, String(), ("body",))
        assert result.error[0].path == ("body",)

    def test_ok_carries_value(self):
        value = {"tags": ["a"]}
        assert check(value, {"tags": [str]}).value is value


class TestToValidator:
    def test_type_coercion(self):
        assert to_validator(str) == TypeV("string")
        assert to_validator(bool) == TypeV("boolean")
        assert to_validator(float) == TypeV("number")
        assert to_validator(None) == TypeV("null")
        assert to_validator(type(None)) == TypeV("null")
        assert to_validator(int).validate(1.5) != []

    def test_dict_coercion(self):
        assert isinstance(to_validator({"name": str}), ObjectV)

    def test_list_coercion(self):
        v = to_validator([str])
        assert isinstance(v, ArrayV)
        v = to_validator([str, int])
        assert isinstance(v.items, OrV)

    def test_tuple_coercion(self):
        assert isinstance(to_validator((str, int)), TupleV)

    def test_passthrough(self):
        v = String()
        assert to_validator(v) is v

    @pytest.mark.parametrize("bad", [[], 5, "string", object, lambda x: x])
    def test_rejects_unknown(self, bad):
        with pytest.raises(SchemaError):
            to_validator(bad)


class TestAssertValid:
    def test_returns_value(self):
        assert String().assert_valid("x") == "x"

    def test_raises(self):
        with pytest.raises(ValidationFailed) as info:
            Object(a=String()).assert_valid({"a": 1, "b": 2})
        assert [v.reason for v in info.value.violations] == [
            "unexpected_object_key",
            "value_must_be_string",
        ]
        assert "a: value_must_be_string" in str(info.value)

    def test_is_valid(self):
        assert Number().is_valid(1)
        assert not Number().is_valid("1")


class TestViolation:
    def test_equality_ignores_context(self):
        assert Violation("x", ("a",), 1) == Violation("x", ("a",), 2)
        assert hash(Violation("x", ("a",), [1])) == hash(Violation("x", ("a",)))
        assert Violation("x", ("a",)) != Violation("x", ("b",))

    def test_reason_enum_normalised(self):
        from jshape import Reason

        v = Violation(Reason.MUST_BE_STRING, ["a"])
        assert type(v.reason) is str
        assert v.path == ("a",)
        assert v == Violation("value_must_be_string", ("a",))

    def test_str(self):
        assert str(Violation("value_must_be_string", ("a", "0"))) == (
            "a.0: value_must_be_string"
        )
        assert str(Violation("value_must_be_null")) == "<root>: value_must_be_null"


class TestValidationContext:
    def test_default_accepts_abstract_containers(self):
        assert Array(Number()).validate((1, 2.5)) == []
        assert Object(a=String()).validate(OrderedDict(a="x")) == []

    def test_strict_requires_json_types(self):
        with validation_context(strict=True):
            assert [v.reason for v in Array(Number()).validate((1, 2))] == [
                "value_must_be_array"
            ]
            assert Array(Number()).validate([1, 2]) == []
        assert Array(Number()).validate((1, 2)) == []

    def test_strict_numbers(self):
        from fractions import Fraction

        assert Number().validate(Fraction(3, 2)) == []
        with validation_context(strict=True):
            assert Number().validate(Fraction(3, 2)) != []


class TestToPydantic:
    def test_simple_model(self):
        schema = {
            "name": String(),
            "age": WholeNumber(),
        }
        User = to_pydantic("User", schema)
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30

    def test_optional_fields(self):
        User = to_pydantic(
            "User", Object(name=Regex("^[A-Z]"), email=Optional(String()))
        )
        user = User(name="Alice")
        assert user.email is None

    def test_nested(self):
        Order = to_pydantic(
            "Order",
            {
                "customer": {"id": str},
                "lines": Array(NumberBetween(0, 10)),
                "meta": Map(String()),
            },
        )
        order = Order(customer={"id": "c1"}, lines=[1.5], meta={"k": "v"})
        assert order.customer.id == "c1"
        assert order.lines == [1.5]

    def test_pydantic_validation(self):
        from pydantic import ValidationError

        User = to_pydantic("User", {"name": String()})
        with pytest.raises(ValidationError):
            User()
        with pytest.raises(ValidationError):
            User(name="x", extra=1)

    def test_requires_object(self):
        with pytest.raises(SchemaError):
            to_pydantic("Bad", Array(String()))
