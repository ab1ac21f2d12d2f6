"""Schemas: named strategies for decoding one shape of JSON value."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from json_typed.engine import load_as
from json_typed.exceptions import (
    JsonParseError,
    JsonTypeError,
    JsonValueError,
    MissingKeysError,
    UnknownKeysError,
)
from json_typed.result import Err, Ok, Result
from json_typed.tyspec import TySpec, as_spec
from json_typed.value.types import JsonArray, JsonObject, JsonType, JsonValue

if TYPE_CHECKING:
    from json_typed.schemas.registry import Schemas

T = TypeVar("T")

# Decode function bound to a schema: receives a value of the schema's shape
OnValue = Callable[[Any, "Schemas"], "Result"]


class JsonSchema(Generic[T]):
    """
    Schema that specifies how to load a specific type from JSON.

    A schema is bound to one expected value shape (``shape``); values of any
    other shape fail with a type error naming the schema's description.
    Schemas are stateless and may be shared freely.

    Example:
        point = JsonSchema(
            "Point",
            lambda value, schemas: Ok(Point(*value.unwrap())),
            shape=JsonType.ARRAY,
        )

    """

    __slots__ = ("_description", "_on_value", "_shape")

    def __init__(
        self,
        description: str,
        on_value: OnValue,
        shape: JsonType | None = None,
    ) -> None:
        self._description = description
        self._on_value = on_value
        self._shape = shape

    @property
    def description(self) -> str:
        """Get a human-readable description of what the schema parses."""
        return self._description

    @property
    def shape(self) -> JsonType | None:
        return self._shape

    def decode(self, value: JsonValue, schemas: Schemas) -> Result:
        """Decode ``value`` using ``schemas`` for nested custom specifications."""
        if self._shape is not None and value.type is not self._shape:
            return Err(JsonTypeError(self._description, value.type.value, value))
        return self._on_value(value, schemas)

    def __repr__(self) -> str:
        return f"JsonSchema({self._description!r})"


def _assembled(
    description: str, value: JsonValue, assemble: Callable[[Any], T], data: Any
) -> Result:
    # assemble may reject decoded content by raising ValueError
    try:
        return Ok(assemble(data))
    except ValueError as e:
        return Err(JsonValueError(description, value, str(e)))


def object_schema(
    description: str,
    fields: Mapping[str, Any],
    assemble: Callable[[dict[str, Any]], T],
    *,
    optional: Iterable[str] = (),
) -> JsonSchema[T]:
    """
    Create a schema for JSON objects with a fixed set of keys.

    Key checks run over the whole object before any value is decoded: every
    missing key is reported together, then every unknown key. Values are then
    decoded in declared order, stopping at the first failure.

    Args:
        description: Name used in diagnostics (usually the target class name)
        fields: Key -> specification (or Python type annotation), in order
        assemble: Builds the result from the decoded key -> value dict
        optional: Declared keys that may be absent

    Returns:
        A schema bound to JSON objects

    Example:
        basic = object_schema("Basic", {"p": bool}, lambda o: Basic(o["p"]))

    """
    specs: dict[str, TySpec] = {k: as_spec(v) for k, v in fields.items()}
    optional_keys = frozenset(optional)

    def on_object(value: JsonObject, schemas: Schemas) -> Result:
        missing = [k for k in specs if k not in value and k not in optional_keys]
        if missing:
            return Err(MissingKeysError(missing))
        unknown = [k for k in value.keys() if k not in specs]
        if unknown:
            return Err(UnknownKeysError(unknown))

        decoded: dict[str, Any] = {}
        for key, spec in specs.items():
            item = value.get(key)
            if item is None:
                continue
            result = load_as(item, spec, schemas)
            if isinstance(result, Err):
                error: JsonParseError = result.error
                return Err(error.at(key))
            decoded[key] = result.value
        return _assembled(description, value, assemble, decoded)

    return JsonSchema(description, on_object, JsonType.OBJECT)


def array_schema(
    description: str,
    element: Any,
    assemble: Callable[[list[Any]], T],
) -> JsonSchema[T]:
    """
    Create a schema for JSON arrays whose elements all match ``element``.

    Example:
        schemas = Schemas.empty().add_schema(
            MyArray,
            lambda t: array_schema("MyArray", t, MyArray),
            defaults=(ANY,),
        )

    """
    element_spec = as_spec(element)

    def on_array(value: JsonArray, schemas: Schemas) -> Result:
        items: list[Any] = []
        for index, item in enumerate(value):
            result = load_as(item, element_spec, schemas)
            if isinstance(result, Err):
                return Err(result.error.at(index))
            items.append(result.value)
        return _assembled(description, value, assemble, items)

    return JsonSchema(description, on_array, JsonType.ARRAY)


def scalar_schema(
    description: str,
    shape: JsonType,
    convert: Callable[[Any], T],
) -> JsonSchema[T]:
    """
    Create a schema converting one kind of JSON scalar.

    ``convert`` receives the unwrapped scalar and may raise ``ValueError``
    to reject it.

    Example:
        uuid = scalar_schema("UUID", JsonType.STRING, UUID)

    """
    if shape in (JsonType.ARRAY, JsonType.OBJECT):
        raise ValueError(f"scalar_schema needs a scalar shape, got {shape.value}")

    def on_scalar(value: JsonValue, schemas: Schemas) -> Result:
        return _assembled(description, value, convert, value.unwrap())

    return JsonSchema(description, on_scalar, shape)
