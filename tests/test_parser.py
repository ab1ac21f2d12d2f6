"""Tests for decoding JSON against built-in specifications."""

import logging

import pytest

from json_typed import (
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
    Err,
    JsonParser,
    JsonSyntaxError,
    JsonTypeError,
    JsonValueError,
    MapOf,
    ObjectOf,
    Ok,
    SetOf,
    TupleOf,
    UnknownSpecError,
    decode,
    decode_or_fail,
    loads,
)
from json_typed.value import JsonArray


class Missing:
    """Identity never registered in these tests."""


class TestDecodeOrFail:
    """Tests for decoding values that match their specification."""

    @pytest.mark.parametrize(
        "text,spec,expected",
        [
            # array
            ("[]", ARRAY, []),
            ("[1]", ARRAY, [1]),
            ('[1, true, [5], "test"]', ARRAY, [1, True, [5], "test"]),
            ("[[1]]", ArrayOf(ARRAY), [[1]]),
            ("[]", ArrayOf(BOOLEAN), []),
            ("[true]", ArrayOf(BOOLEAN), [True]),
            # boolean
            ("true", BOOLEAN, True),
            ("false", BOOLEAN, False),
            # map
            ("{}", MapOf(), {}),
            ('{"k": 7}', MapOf(), {"k": 7}),
            ('{"k": true}', MapOf(STRING), {"k": True}),
            ('{"k": true}', MapOf(STRING, BOOLEAN), {"k": True}),
            # number
            ("7", NUMBER, 7),
            ("-2.5", NUMBER, -2.5),
            # null
            ("null", NULL, None),
            # object
            ("{}", OBJECT, {}),
            ('{ "k": 1 }', OBJECT, {"k": 1}),
            (
                '{"k1": 1, "k2": true, "k3": { "k31": [7] }, "k4": "test"}',
                OBJECT,
                {"k1": 1, "k2": True, "k3": {"k31": [7]}, "k4": "test"},
            ),
            ('{"k": {"k2": 1}}', ObjectOf(OBJECT), {"k": {"k2": 1}}),
            ("{}", ObjectOf(BOOLEAN), {}),
            ('{"k": true}', ObjectOf(BOOLEAN), {"k": True}),
            # string
            ('""', STRING, ""),
            ('"test"', STRING, "test"),
            ('"t\\"es\\"t"', STRING, 't"es"t'),
            # any
            ("[]", ANY, []),
            ("[1]", ANY, [1]),
            ("1", ANY, 1),
            ("true", ANY, True),
            ("null", ANY, None),
            ('{"k": [1, {"j": null}]}', ANY, {"k": [1, {"j": None}]}),
            # set
            ("[]", SetOf(), set()),
            ('["a", "b", "a"]', SetOf(STRING), {"a", "b"}),
            # tuple
            ("[]", TupleOf(()), ()),
            ('[1, "x"]', TupleOf((NUMBER, STRING)), (1, "x")),
            # any of
            ("1", AnyOf((NUMBER, BOOLEAN)), 1),
            ("true", AnyOf((NUMBER, BOOLEAN)), True),
            ("null", AnyOf((NUMBER, NULL)), None),
        ],
    )
    def test_decode(self, parser, text, spec, expected):
        """Test that matching values decode to native data."""
        assert parser.decode_or_fail(text, spec) == expected

    @pytest.mark.parametrize(
        "text,annotation,expected",
        [
            ("[true]", list[bool], [True]),
            ('{"k": 1}', dict[str, int], {"k": 1}),
            ('[1, "x"]', tuple[int, str], (1, "x")),
            ("[1, 2]", tuple[int, ...], [1, 2]),
            ("[1, 1]", set[int], {1}),
            ("null", int | None, None),
            ("3", int | None, 3),
            ("3.5", float, 3.5),
        ],
    )
    def test_decode_with_annotations(self, parser, text, annotation, expected):
        """Test that Python annotations are accepted as specifications."""
        assert parser.decode_or_fail(text, annotation) == expected

    def test_object_key_order(self, parser):
        """Test that decoded objects keep input key order."""
        result = parser.decode_or_fail('{"b": 1, "a": 2}', OBJECT)
        assert list(result) == ["b", "a"]

    def test_tuple_result_type(self, parser):
        """Test that tuples decode to tuple and sets to set."""
        assert isinstance(parser.decode_or_fail("[1]", TupleOf((NUMBER,))), tuple)
        assert isinstance(parser.decode_or_fail("[1]", SetOf(NUMBER)), set)


class TestDecodeFailures:
    """Tests for values that do not match their specification."""

    @pytest.mark.parametrize(
        "text,spec",
        [
            ("{}", ARRAY),
            ("{}", ArrayOf(BOOLEAN)),
            ("[1]", ArrayOf(BOOLEAN)),
            ("null", BOOLEAN),
            ('{"k": 1}', MapOf(STRING, BOOLEAN)),
            ("true", NUMBER),
            ('"7"', NUMBER),
            ("true", NULL),
            ("[]", OBJECT),
            ("[]", ObjectOf(BOOLEAN)),
            ('{"k": 1}', ObjectOf(BOOLEAN)),
            ("true", STRING),
            ("{}", SetOf()),
            ("{}", TupleOf((NUMBER,))),
            ('"x"', AnyOf((NUMBER, BOOLEAN))),
            ("1", AnyOf(())),
        ],
    )
    def test_type_error(self, parser, text, spec):
        """Test that a mismatched value raises a type error."""
        with pytest.raises(JsonTypeError):
            parser.decode_or_fail(text, spec)

    @pytest.mark.parametrize(
        "text,spec",
        [
            ('{"k": 1}', MapOf(BOOLEAN)),
            ('{"k": 1}', MapOf(BOOLEAN, BOOLEAN)),
            ("{}", MapOf(BOOLEAN)),
            ("7", MapOf(NUMBER)),
        ],
    )
    def test_map_with_non_string_keys(self, parser, text, spec):
        """Test that map keys other than string are never readable."""
        with pytest.raises(UnknownSpecError) as exc_info:
            parser.decode_or_fail(text, spec)
        assert exc_info.value.spec is spec.key

    def test_primitive_error_fields(self, parser):
        """Test the fields of a primitive mismatch."""
        result = parser.decode("true", NUMBER)
        assert isinstance(result, Err)
        error = result.error
        assert error.expected == "number"
        assert error.actual == "boolean"
        assert error.reason == "expected: number, but got: boolean: true"

    def test_array_rendered_compactly(self, parser):
        """Test that arrays in error messages are wrapped in brackets with commas."""
        with pytest.raises(JsonTypeError, match=r"but got: array: \[1,2\]"):
            parser.decode_or_fail("[1, 2]", BOOLEAN)

    def test_element_error_path(self, parser):
        """Test that element failures record the index."""
        error = parser.decode("[true, 1]", ArrayOf(BOOLEAN)).error
        assert error.path == (1,)
        assert error.expected == "boolean"
        assert str(error).splitlines() == [
            "expected: boolean, but got: number: 1",
            "When trying to read a value for specification: `array of boolean`",
            "I saw: `[true,1]`",
            "In the value at index 1:",
            "When trying to read a value for specification: `boolean`",
            "I saw: `1`",
            "But this is a `number`",
        ]

    def test_field_error_path(self, parser):
        """Test that object value failures record the key."""
        error = parser.decode('{"a": {"x": true}, "b": {"c": 1}}', ObjectOf(ObjectOf(BOOLEAN))).error
        assert error.path == ("b", "c")

    def test_tuple_length_mismatch(self, parser):
        """Test that a tuple of the wrong length reports both lengths."""
        error = parser.decode("[1, 2, 3]", TupleOf((NUMBER, NUMBER))).error
        assert isinstance(error, JsonTypeError)
        assert error.expected == "tuple of length 2"
        assert error.actual == "array of length 3"

    def test_tuple_element_error(self, parser):
        """Test that tuple element failures record the index."""
        error = parser.decode("[1, 2]", TupleOf((NUMBER, STRING))).error
        assert error.path == (1,)
        assert error.expected == "string"

    def test_unhashable_set_elements(self, parser):
        """Test that set elements must decode to hashable values."""
        error = parser.decode("[[1]]", SetOf(ARRAY)).error
        assert isinstance(error, JsonValueError)
        assert "hashable" in error.reason

    def test_any_of_error_is_not_nested(self, parser):
        """Test that a failed alternative list reports one flat type error."""
        error = parser.decode('"x"', AnyOf((NUMBER, BOOLEAN))).error
        assert error.expected == "number or boolean"
        assert error.actual == "string"
        assert str(error).splitlines() == [
            'expected: number or boolean, but got: string: "x"',
            "When trying to read a value for specification: `number or boolean`",
            'I saw: `"x"`',
            "But this is a `string`",
        ]

    def test_any_of_inner_failure_reports_alternatives(self, parser):
        """Test that an alternative failing deep inside still reports the whole union."""
        error = parser.decode("[1]", AnyOf((ArrayOf(BOOLEAN), STRING))).error
        assert isinstance(error, JsonTypeError)
        assert error.expected == "array of boolean or string"
        assert error.path == ()

    @pytest.mark.parametrize(
        "spec,expected",
        [
            (AnyOf((Custom(Missing), NUMBER)), "Missing or number"),
            (AnyOf((NUMBER, MapOf(BOOLEAN))), "number or map from boolean to any"),
        ],
    )
    def test_any_of_with_unknown_alternative(self, parser, caplog, spec, expected):
        """Test that unresolvable alternatives still give one flat type error."""
        with caplog.at_level(logging.DEBUG, logger="json_typed.engine"):
            error = parser.decode('"s"', spec).error
        assert type(error) is JsonTypeError
        assert error.expected == expected
        assert error.actual == "string"
        assert "cannot be resolved" in caplog.text

    def test_map_key_conclusion(self, parser):
        """Test that a non-string map key is not reported as a missing schema."""
        error = parser.decode('{"k": 1}', MapOf(BOOLEAN)).error
        assert error.reason == "unknown specification: boolean"
        assert str(error).splitlines()[-1] == (
            "But `boolean` cannot be read as a key; only string map keys are supported"
        )

    def test_result_values(self, parser):
        """Test that decode returns Ok and Err instead of raising."""
        ok = parser.decode("[true]", ArrayOf(BOOLEAN))
        assert ok == Ok([True])
        assert ok.is_ok()
        err = parser.decode("{}", ArrayOf(BOOLEAN))
        assert isinstance(err, Err)
        assert not err.is_ok()
        with pytest.raises(JsonTypeError):
            err.unwrap()

    def test_failure_logged(self, parser, caplog):
        """Test that decode failures are logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="json_typed.parser"):
            parser.decode("[1]", ArrayOf(BOOLEAN))
        assert "Could not decode array of boolean at path (0,)" in caplog.text


class TestSyntaxErrors:
    """Tests for text that is not JSON."""

    def test_decode_returns_syntax_error(self, parser):
        """Test that decode reports bad text as an Err value."""
        result = parser.decode("[1,", ANY)
        assert isinstance(result, Err)
        assert isinstance(result.error, JsonSyntaxError)

    def test_decode_or_fail_raises(self, parser):
        """Test that decode_or_fail raises syntax errors."""
        with pytest.raises(JsonSyntaxError):
            parser.decode_or_fail("{", OBJECT)

    def test_max_depth(self):
        """Test that the parser's depth ceiling applies before matching."""
        shallow = JsonParser(max_depth=2)
        assert shallow.decode_or_fail("[[1]]", ANY) == [[1]]
        with pytest.raises(JsonSyntaxError, match=r"Maximum nesting depth \(2\)"):
            shallow.decode_or_fail("[[[1]]]", ANY)

    def test_depth_beyond_recursion_limit(self):
        """Test that a generous max_depth still fails as a syntax error."""
        text = "[" * 600 + "]" * 600
        result = JsonParser(max_depth=1000).decode(text, ANY)
        assert isinstance(result, Err)
        assert isinstance(result.error, JsonSyntaxError)

    def test_deep_value_tree(self, parser):
        """Test that a value tree too deep to match is returned as an error."""
        value = JsonArray(())
        for _ in range(3000):
            value = JsonArray((value,))
        result = parser.load_value(value, ANY)
        assert isinstance(result, Err)
        assert isinstance(result.error, JsonSyntaxError)
        assert "nests too deeply to decode" in str(result.error)

    def test_deep_native_data(self):
        """Test that deeply nested Python data is returned as an error."""
        data: list = []
        for _ in range(3000):
            data = [data]
        result = JsonParser(max_depth=5000).load(data, ANY)
        assert isinstance(result, Err)
        assert isinstance(result.error, JsonSyntaxError)

    def test_bytes(self, parser):
        """Test that UTF-8 bytes can be decoded."""
        assert parser.decode_or_fail(b'["\xc3\xa9"]', ArrayOf(STRING)) == ["é"]


class TestEntryPoints:
    """Tests for the other ways into the decoder."""

    def test_load_native_data(self, parser):
        """Test decoding already-parsed Python data."""
        assert parser.load_or_fail({"k": [True]}, ObjectOf(ArrayOf(BOOLEAN))) == {"k": [True]}
        assert isinstance(parser.load({"k": 1}, ObjectOf(BOOLEAN)), Err)

    def test_load_unsupported_data(self, parser):
        """Test that native data JSON cannot represent is a TypeError."""
        with pytest.raises(TypeError):
            parser.load(object(), ANY)

    def test_load_value(self, parser):
        """Test decoding a value tree directly."""
        assert parser.load_value(loads("[1, 2]"), list[int]) == Ok([1, 2])

    def test_module_level_decode(self):
        """Test the module-level helpers with no custom schemas."""
        assert decode("[true]", list[bool]) == Ok([True])
        assert decode_or_fail('{"k": 7}', dict[str, int]) == {"k": 7}
        with pytest.raises(JsonTypeError):
            decode_or_fail("7", STRING)

    def test_repr(self):
        """Test the parser repr."""
        assert repr(JsonParser()) == "JsonParser(Schemas(), max_depth=100)"
