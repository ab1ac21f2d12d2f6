"""
Matching engine: decode a JSON value against a type specification.

Failures are returned as ``Err`` values, never raised, so alternatives in
``AnyOf`` can be tried without exception-based backtracking. The only
exceptions that escape are configuration errors from schema factories.

Recursion follows the structure of the value, which is finite; the reader
bounds its depth.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from json_typed.exceptions import JsonTypeError, JsonValueError, UnknownSpecError
from json_typed.result import Err, Ok, Result
from json_typed.tyspec import (
    ANY,
    STRING,
    AnyOf,
    ArrayOf,
    Custom,
    MapOf,
    ObjectOf,
    Primitive,
    SetOf,
    TupleOf,
    TySpec,
    describe,
    desugar,
)
from json_typed.value.types import JsonArray, JsonObject, JsonType, JsonValue

if TYPE_CHECKING:
    from json_typed.schemas.registry import Schemas

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: dict[Primitive, JsonType] = {
    Primitive.BOOLEAN: JsonType.BOOLEAN,
    Primitive.NUMBER: JsonType.NUMBER,
    Primitive.STRING: JsonType.STRING,
    Primitive.NULL: JsonType.NULL,
}


def _type_error(expected: str, value: JsonValue) -> Err:
    return Err(JsonTypeError(expected, value.type.value, value))


def _load_any(value: JsonValue, schemas: Schemas) -> Result:
    if isinstance(value, JsonArray):
        return _load_elements(value, ANY, schemas)
    if isinstance(value, JsonObject):
        return _load_entries(value, ANY, schemas)
    return Ok(value.unwrap())


def _load_elements(value: JsonArray, element: TySpec, schemas: Schemas) -> Result:
    items: list[Any] = []
    for index, item in enumerate(value):
        result = load_as(item, element, schemas)
        if isinstance(result, Err):
            return Err(result.error.at(index))
        items.append(result.value)
    return Ok(items)


def _load_entries(value: JsonObject, item_spec: TySpec, schemas: Schemas) -> Result:
    entries: dict[str, Any] = {}
    for key, item in value.fields.items():
        result = load_as(item, item_spec, schemas)
        if isinstance(result, Err):
            return Err(result.error.at(key))
        entries[key] = result.value
    return Ok(entries)


def _load_array(value: JsonValue, spec: ArrayOf, schemas: Schemas) -> Result:
    if not isinstance(value, JsonArray):
        return _type_error("array", value)
    return _load_elements(value, spec.element, schemas)


def _load_object(value: JsonValue, spec: ObjectOf, schemas: Schemas) -> Result:
    if not isinstance(value, JsonObject):
        return _type_error("object", value)
    return _load_entries(value, spec.value, schemas)


def _load_map(value: JsonValue, spec: MapOf, schemas: Schemas) -> Result:
    # Only string keys can be read, whatever the value looks like
    if spec.key is not STRING:
        return Err(UnknownSpecError(spec.key))
    if not isinstance(value, JsonObject):
        return _type_error("object", value)
    return _load_entries(value, spec.value, schemas)


def _load_set(value: JsonValue, spec: SetOf, schemas: Schemas) -> Result:
    if not isinstance(value, JsonArray):
        return _type_error("array", value)
    result = _load_elements(value, spec.element, schemas)
    if isinstance(result, Err):
        return result
    try:
        return Ok(set(result.value))
    except TypeError as e:
        return Err(JsonValueError(describe(spec), value, f"set elements must be hashable ({e})"))


def _load_tuple(value: JsonValue, spec: TupleOf, schemas: Schemas) -> Result:
    expected = f"tuple of length {len(spec.elements)}"
    if not isinstance(value, JsonArray):
        return _type_error(expected, value)
    if len(value) != len(spec.elements):
        return Err(JsonTypeError(expected, f"array of length {len(value)}", value))
    items: list[Any] = []
    for index, (item, item_spec) in enumerate(zip(value, spec.elements, strict=True)):
        result = load_as(item, item_spec, schemas)
        if isinstance(result, Err):
            return Err(result.error.at(index))
        items.append(result.value)
    return Ok(tuple(items))


def _load_any_of(value: JsonValue, spec: AnyOf, schemas: Schemas) -> Result:
    # Alternative failures are not nested into the report
    for alternative in spec.alternatives:
        result = load_as(value, alternative, schemas)
        if isinstance(result, Ok):
            return result
        if isinstance(result.error, UnknownSpecError):
            logger.debug(
                "Alternative %s of %s cannot be resolved: %s",
                describe(alternative),
                describe(spec),
                result.error.reason,
            )
    return _type_error(describe(spec), value)


def _load_custom(value: JsonValue, spec: Custom, schemas: Schemas) -> Result:
    factory = schemas.resolve(spec.identity)
    if factory is None:
        return Err(UnknownSpecError(spec).within(describe(spec), value))
    schema = factory(spec.args)
    result = schema.decode(value, schemas)
    if isinstance(result, Err):
        return Err(result.error.within(schema.description, value))
    return result


def load_as(value: JsonValue, spec: TySpec, schemas: Schemas) -> Result:
    """
    Decode ``value`` as a member of ``spec``.

    Args:
        value: The JSON value tree
        spec: The type specification to match
        schemas: Registry used to resolve custom specifications

    Returns:
        ``Ok(decoded)`` or ``Err(JsonParseError)``

    Raises:
        SchemaConfigurationError: If a schema factory rejects its arguments

    """
    spec = desugar(spec)

    if isinstance(spec, Custom):
        return _load_custom(value, spec, schemas)

    if spec is ANY:
        result = _load_any(value, schemas)
    elif isinstance(spec, Primitive):
        if value.type is _PRIMITIVE_TYPES[spec]:
            return Ok(value.unwrap())
        result = _type_error(spec.value, value)
    elif isinstance(spec, ArrayOf):
        result = _load_array(value, spec, schemas)
    elif isinstance(spec, ObjectOf):
        result = _load_object(value, spec, schemas)
    elif isinstance(spec, MapOf):
        result = _load_map(value, spec, schemas)
    elif isinstance(spec, SetOf):
        result = _load_set(value, spec, schemas)
    elif isinstance(spec, TupleOf):
        result = _load_tuple(value, spec, schemas)
    elif isinstance(spec, AnyOf):
        result = _load_any_of(value, spec, schemas)
    else:
        raise TypeError(f"Not a type specification: {spec!r}")

    if isinstance(result, Err):
        return Err(result.error.within(describe(spec), value))
    return result
