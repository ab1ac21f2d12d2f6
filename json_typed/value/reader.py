"""JSON reader producing the tagged value model."""

from __future__ import annotations

import json
import logging
from typing import Any

from json_typed.exceptions import JsonSyntaxError
from json_typed.value.types import (
    JSON_NULL,
    JsonArray,
    JsonBoolean,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard constant {name} is not valid JSON")


class JsonReader:
    """Converts native data produced by a JSON tokenizer into JSON values.

    Attributes:
        max_depth: Maximum nesting depth allowed.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        """Initialize the reader.

        Args:
            max_depth: Maximum nesting depth allowed (default 100).
        """
        self.max_depth = max_depth
        self._current_depth = 0

    def read_text(self, s: str) -> JsonValue:
        """Tokenize JSON text and convert it.

        Raises:
            JsonSyntaxError: If the text is not valid JSON or nests too deeply.
        """
        try:
            raw = json.loads(s, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            logger.debug("Rejected JSON text at char %s: %s", e.pos, e.msg)
            raise JsonSyntaxError(e.msg, e.pos, e.lineno, e.colno) from e
        except ValueError as e:
            raise JsonSyntaxError(str(e)) from e
        except RecursionError as e:
            raise JsonSyntaxError(
                f"Maximum nesting depth ({self.max_depth}) exceeded"
            ) from e
        return self.read_value(raw)

    def _enter(self) -> None:
        self._current_depth += 1
        if self._current_depth > self.max_depth:
            raise JsonSyntaxError(f"Maximum nesting depth ({self.max_depth}) exceeded")

    def _read_array(self, items: list[Any] | tuple[Any, ...]) -> JsonArray:
        self._enter()
        try:
            return JsonArray(tuple(self._read(item) for item in items))
        finally:
            self._current_depth -= 1

    def _read_object(self, mapping: dict[Any, Any]) -> JsonObject:
        self._enter()
        try:
            fields: dict[str, JsonValue] = {}
            for key, item in mapping.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"JSON object keys must be strings, not {type(key).__name__}"
                    )
                fields[key] = self._read(item)
            return JsonObject(fields)
        finally:
            self._current_depth -= 1

    def read_value(self, x: Any) -> JsonValue:
        """Convert one native value (and everything it contains).

        Raises:
            TypeError: If ``x`` holds something JSON cannot represent.
            JsonSyntaxError: If ``x`` nests deeper than ``max_depth`` or than
                the interpreter's recursion limit allows.
        """
        try:
            return self._read(x)
        except RecursionError as e:
            raise JsonSyntaxError(
                f"Input nests too deeply to read (max_depth is {self.max_depth})"
            ) from e

    def _read(self, x: Any) -> JsonValue:
        if x is None:
            return JSON_NULL
        # bool before int: True is an int too
        if isinstance(x, bool):
            return JsonBoolean(x)
        if isinstance(x, (int, float)):
            return JsonNumber(x)
        if isinstance(x, str):
            return JsonString(x)
        if isinstance(x, (list, tuple)):
            return self._read_array(x)
        if isinstance(x, dict):
            return self._read_object(x)
        raise TypeError(f"Could not load JSON value from {type(x).__name__}: {x!r}")


def loads(s: str | bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """Load a JSON string and return its value tree.

    Args:
        s: The JSON string (or UTF-8 bytes) to parse.
        max_depth: Maximum nesting depth allowed (default 100).

    Returns:
        The parsed JSON value.

    Raises:
        JsonSyntaxError: If the input is invalid JSON or contains invalid UTF-8.

    Examples:
        >>> loads('[1, true]')
        JsonArray(items=(JsonNumber(value=1), JsonBoolean(value=True)))
    """
    if isinstance(s, bytes):
        try:
            s = s.decode("utf-8")
        except UnicodeDecodeError as e:
            raise JsonSyntaxError(f"Invalid UTF-8 encoding: {e}") from e

    return JsonReader(max_depth=max_depth).read_text(s)


def to_json_value(x: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """Convert already-parsed Python data into a JSON value tree.

    Examples:
        >>> to_json_value({"k": [1]})
        JsonObject(fields=mappingproxy({'k': JsonArray(items=(JsonNumber(value=1),))}))
    """
    return JsonReader(max_depth=max_depth).read_value(x)
