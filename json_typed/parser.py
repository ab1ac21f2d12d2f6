"""JSON parser facade binding a schema registry."""

from __future__ import annotations

import logging
from typing import Any

from json_typed.engine import load_as
from json_typed.exceptions import JsonParseError, JsonSyntaxError
from json_typed.result import Err, Result
from json_typed.schemas.registry import Schemas
from json_typed.tyspec import as_spec, describe
from json_typed.value.reader import DEFAULT_MAX_DEPTH, loads, to_json_value
from json_typed.value.types import JsonValue

logger = logging.getLogger(__name__)


class JsonParser:
    """
    Decodes JSON into values described by type specifications.

    A parser holds a reference to one immutable schema registry and is
    otherwise stateless, so it can be shared between threads.

    Example:
        parser = JsonParser(schemas)

        # Failures as values
        match parser.decode('{"p": true}', Basic):
            case Ok(value=basic): ...
            case Err(error=e): print(e)

        # Failures raised
        basic = parser.decode_or_fail('{"p": true}', Basic)

    """

    __slots__ = ("_schemas", "max_depth")

    def __init__(
        self,
        schemas: Schemas | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """
        Initialize the parser.

        Args:
            schemas: Registry for custom specifications (default: none).
            max_depth: Maximum nesting depth accepted from input (default 100).

        """
        self._schemas = schemas if schemas is not None else Schemas.empty()
        self.max_depth = max_depth

    @property
    def schemas(self) -> Schemas:
        return self._schemas

    def load_value(self, value: JsonValue, spec: Any) -> Result:
        """
        Decode a JSON value tree.

        Args:
            value: The value tree.
            spec: A type specification or Python type annotation.

        Returns:
            ``Ok(decoded)`` or ``Err(JsonParseError)``, or ``Err(JsonSyntaxError)``
            when the tree nests deeper than the interpreter can recurse.

        """
        spec = as_spec(spec)
        try:
            result = load_as(value, spec, self._schemas)
        except RecursionError as e:
            logger.debug("Value too deeply nested to decode as %s", describe(spec))
            too_deep = JsonSyntaxError(
                f"Input nests too deeply to decode (max_depth is {self.max_depth})"
            )
            too_deep.__cause__ = e
            return Err(too_deep)
        if isinstance(result, Err):
            error: JsonParseError = result.error
            logger.debug(
                "Could not decode %s at path %s: %s", describe(spec), error.path, error.reason
            )
        return result

    def decode(self, text: str | bytes, spec: Any) -> Result:
        """
        Parse JSON text and decode it. Never raises for bad input.

        Returns:
            ``Ok(decoded)``, or ``Err`` holding a ``JsonSyntaxError`` or
            ``JsonParseError``.

        Example:
            parser.decode("[true]", array_of(bool))   # Ok(value=[True])
            parser.decode("{}", array_of(bool))       # Err(error=JsonTypeError(...))

        """
        try:
            value = loads(text, max_depth=self.max_depth)
        except JsonSyntaxError as e:
            return Err(e)
        return self.load_value(value, spec)

    def decode_or_fail(self, text: str | bytes, spec: Any) -> Any:
        """
        Parse JSON text and decode it.

        Raises:
            JsonSyntaxError: If the text is not valid JSON.
            JsonParseError: If the value does not match ``spec``.

        """
        return self.decode(text, spec).unwrap()

    def load(self, obj: Any, spec: Any) -> Result:
        """
        Decode already-parsed Python data (dicts, lists and scalars).

        Raises:
            TypeError: If ``obj`` contains something JSON cannot represent.

        """
        try:
            value = to_json_value(obj, max_depth=self.max_depth)
        except JsonSyntaxError as e:
            return Err(e)
        return self.load_value(value, spec)

    def load_or_fail(self, obj: Any, spec: Any) -> Any:
        """Decode already-parsed Python data, raising on failure."""
        return self.load(obj, spec).unwrap()

    def __repr__(self) -> str:
        return f"JsonParser({self._schemas!r}, max_depth={self.max_depth})"


_default_parser = JsonParser()


def decode(text: str | bytes, spec: Any) -> Result:
    """Decode JSON text with no custom schemas. See ``JsonParser.decode``."""
    return _default_parser.decode(text, spec)


def decode_or_fail(text: str | bytes, spec: Any) -> Any:
    """Decode JSON text with no custom schemas, raising on failure."""
    return _default_parser.decode_or_fail(text, spec)
