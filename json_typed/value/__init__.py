"""JSON value model and reader.

Raw text is tokenized by the standard library ``json`` module and converted
into immutable, tagged values that keep object key order.

Example usage:
    >>> from json_typed.value import loads
    >>> value = loads('{"name": "Alice", "tags": [1, 2]}')
    >>> value.type
    <JsonType.OBJECT: 'object'>
    >>> value.render()
    '{"name":"Alice","tags":[1,2]}'
"""

from json_typed.exceptions import JsonSyntaxError
from json_typed.value.reader import DEFAULT_MAX_DEPTH, JsonReader, loads, to_json_value
from json_typed.value.types import (
    JSON_NULL,
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonType,
    JsonValue,
)

__all__ = [
    "loads",
    "to_json_value",
    "JsonReader",
    "JsonSyntaxError",
    "DEFAULT_MAX_DEPTH",
    "JsonType",
    "JsonValue",
    "JsonNull",
    "JsonBoolean",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "JSON_NULL",
]
