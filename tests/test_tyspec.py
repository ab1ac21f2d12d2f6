"""Tests for type specifications."""

import dataclasses
from typing import Any, Optional, Union

import pytest

from json_typed.tyspec import (
    ANY,
    ARRAY,
    BOOLEAN,
    NULL,
    NUMBER,
    OBJECT,
    STRING,
    AnyOf,
    ArrayOf,
    Custom,
    MapOf,
    ObjectOf,
    SetOf,
    Symbol,
    TupleOf,
    any_of,
    array_of,
    as_spec,
    custom,
    describe,
    desugar,
    is_native,
    map_of,
    object_of,
    set_of,
    tuple_of,
)


class Person:
    pass


POINT = Symbol("Point")


class TestAsSpec:
    """Tests for coercing Python annotations into specifications."""

    @pytest.mark.parametrize(
        "annotation,expected",
        [
            (bool, BOOLEAN),
            (int, NUMBER),
            (float, NUMBER),
            (str, STRING),
            (None, NULL),
            (type(None), NULL),
            (Any, ANY),
            (list, ARRAY),
            (dict, OBJECT),
            (set, SetOf(ANY)),
            (frozenset, SetOf(ANY)),
            (list[bool], ArrayOf(BOOLEAN)),
            (list[list[int]], ArrayOf(ArrayOf(NUMBER))),
            (dict[str, int], MapOf(STRING, NUMBER)),
            (dict[bool, int], MapOf(BOOLEAN, NUMBER)),
            (set[str], SetOf(STRING)),
            (frozenset[int], SetOf(NUMBER)),
            (tuple[int, str], TupleOf((NUMBER, STRING))),
            (tuple[int, ...], ArrayOf(NUMBER)),
            (int | None, AnyOf((NUMBER, NULL))),
            (Optional[bool], AnyOf((BOOLEAN, NULL))),
            (Union[int, str], AnyOf((NUMBER, STRING))),
            (Person, Custom(Person)),
            (list[Person], ArrayOf(Custom(Person))),
            (POINT, Custom(POINT)),
            ("token", Custom("token")),
        ],
    )
    def test_annotations(self, annotation, expected):
        """Test that annotations translate to the expected specification."""
        assert as_spec(annotation) == expected

    @pytest.mark.parametrize(
        "spec",
        [BOOLEAN, ANY, ARRAY, ArrayOf(BOOLEAN), MapOf(), TupleOf(()), Custom(Person)],
    )
    def test_specifications_pass_through(self, spec):
        """Test that specifications are returned unchanged."""
        assert as_spec(spec) is spec

    @pytest.mark.parametrize("obj", [[1], {"a": 1}])
    def test_unhashable_rejected(self, obj):
        """Test that unhashable objects cannot become custom identities."""
        with pytest.raises(TypeError, match="cannot be used as a type specification"):
            as_spec(obj)

    @pytest.mark.parametrize("obj,expected", [(bool, True), (Any, True), (None, True), (Person, False), ([1], False)])
    def test_is_native(self, obj, expected):
        """Test which identities bypass the registry."""
        assert is_native(obj) is expected


class TestDescribe:
    """Tests for specification descriptions."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            (BOOLEAN, "boolean"),
            (NUMBER, "number"),
            (STRING, "string"),
            (NULL, "null"),
            (ANY, "any"),
            (ARRAY, "array"),
            (OBJECT, "object"),
            (ArrayOf(ANY), "array"),
            (ArrayOf(BOOLEAN), "array of boolean"),
            (ArrayOf(ArrayOf(NUMBER)), "array of array of number"),
            (ObjectOf(ANY), "object"),
            (ObjectOf(BOOLEAN), "object of boolean"),
            (MapOf(STRING, BOOLEAN), "map from string to boolean"),
            (SetOf(ANY), "set"),
            (SetOf(STRING), "set of string"),
            (TupleOf((NUMBER, STRING)), "tuple of (number, string)"),
            (AnyOf((NUMBER, BOOLEAN)), "number or boolean"),
            (AnyOf(()), "nothing"),
            (Custom(Person), "Person"),
            (Custom(Person, (BOOLEAN, NUMBER)), "Person of boolean, number"),
            (Custom(POINT), "Point"),
            (Custom("token"), "token"),
        ],
    )
    def test_describe(self, spec, expected):
        """Test the human-readable description of each specification."""
        assert describe(spec) == expected

    def test_not_a_specification(self):
        """Test that describing something else fails."""
        with pytest.raises(TypeError, match="Not a type specification"):
            describe(bool)


class TestSpecifications:
    """Tests for specification values and helpers."""

    def test_desugar(self):
        """Test that bare containers expand to their ANY forms."""
        assert desugar(ARRAY) == ArrayOf(ANY)
        assert desugar(OBJECT) == ObjectOf(ANY)
        assert desugar(BOOLEAN) is BOOLEAN

    def test_defaults(self):
        """Test the default parameters of built-in specifications."""
        assert ArrayOf() == ArrayOf(ANY)
        assert ObjectOf() == ObjectOf(ANY)
        assert MapOf() == MapOf(STRING, ANY)
        assert SetOf() == SetOf(ANY)

    def test_helpers_coerce_arguments(self):
        """Test that helper constructors accept Python annotations."""
        assert array_of(bool) == ArrayOf(BOOLEAN)
        assert array_of() == ArrayOf(ANY)
        assert object_of(int) == ObjectOf(NUMBER)
        assert map_of(value=bool) == MapOf(STRING, BOOLEAN)
        assert set_of(str) == SetOf(STRING)
        assert tuple_of(int, str) == TupleOf((NUMBER, STRING))
        assert any_of(int, None) == AnyOf((NUMBER, NULL))
        assert custom(Person, bool) == Custom(Person, (BOOLEAN,))

    def test_specifications_are_immutable(self):
        """Test that specifications cannot be modified."""
        spec = ArrayOf(BOOLEAN)
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.element = NUMBER

    def test_specifications_are_hashable(self):
        """Test that specifications can be used as dictionary keys."""
        table = {ArrayOf(BOOLEAN): 1, Custom(Person, (NUMBER,)): 2}
        assert table[ArrayOf(BOOLEAN)] == 1
        assert table[Custom(Person, (NUMBER,))] == 2

    def test_symbols_compare_by_identity(self):
        """Test that symbols with the same name are different identities."""
        other = Symbol("Point")
        assert other != POINT
        assert Custom(other) != Custom(POINT)
        assert repr(POINT) == "Symbol('Point')"
