"""Schema factories deriving object schemas from Python classes."""

from __future__ import annotations

from dataclasses import MISSING, fields as dataclass_fields, is_dataclass
from typing import Any, TypeVar, get_type_hints

from json_typed.schemas.schema import JsonSchema, object_schema
from json_typed.tyspec import TySpec, as_spec

T = TypeVar("T")


class DataclassSchemaBuilder:
    """
    Builds object schemas for a dataclass from its fields and type hints.

    Each init field becomes a JSON key (the field name, or its entry in
    ``field_mapping``) whose specification comes from the field's
    annotation. Fields with a default or default factory are optional keys.

    Example:
        @dataclass
        class Person:
            name: str
            email: str | None = None

        schema = dataclass_schema(Person, {"email": "e-mail"})
        # reads {"name": "Alice", "e-mail": null}
    """

    __slots__ = ("_cls", "_field_mapping", "_description", "_keys", "_specs", "_optional")

    def __init__(
        self,
        cls: type[T],
        field_mapping: dict[str, str] | None = None,
        description: str | None = None,
    ) -> None:
        if not (isinstance(cls, type) and is_dataclass(cls)):
            raise TypeError(f"{getattr(cls, '__name__', cls)} is not a dataclass")
        self._cls = cls
        # Map dataclass field names to JSON keys
        self._field_mapping = field_mapping or {}
        self._description = description or cls.__name__

        hints = get_type_hints(cls)
        self._keys: dict[str, str] = {}  # JSON key -> field name
        self._specs: dict[str, TySpec] = {}
        self._optional: list[str] = []
        for f in dataclass_fields(cls):
            if not f.init:
                continue
            key = self._field_mapping.get(f.name, f.name)
            self._keys[key] = f.name
            self._specs[key] = as_spec(hints.get(f.name, Any))
            if f.default is not MISSING or f.default_factory is not MISSING:
                self._optional.append(key)

    def _assemble(self, decoded: dict[str, Any]) -> Any:
        return self._cls(**{self._keys[key]: v for key, v in decoded.items()})

    def build(self) -> JsonSchema[Any]:
        return object_schema(
            self._description, self._specs, self._assemble, optional=self._optional
        )


def dataclass_schema(
    cls: type[T],
    field_mapping: dict[str, str] | None = None,
    description: str | None = None,
) -> JsonSchema[T]:
    """
    Create an object schema for a dataclass.

    Args:
        cls: The dataclass type to instantiate.
        field_mapping: Optional mapping from field names to JSON keys.
        description: Name used in diagnostics (defaults to the class name).

    Returns:
        A schema producing ``cls`` instances.

    Raises:
        TypeError: If ``cls`` is not a dataclass.

    Example:
        schemas = Schemas.empty().add_schema(Person, dataclass_schema(Person))
        person = JsonParser(schemas).decode_or_fail(text, Person)
    """
    return DataclassSchemaBuilder(cls, field_mapping, description).build()
