"""
Optional Pydantic model support for json-typed.

This module provides a schema factory that produces Pydantic model instances.
Pydantic is NOT a required dependency - this module gracefully handles its absence.

Usage:
    from json_typed.schemas.pydantic_support import pydantic_schema
    from pydantic import BaseModel

    class Person(BaseModel):
        name: str
        email: str

    schemas = Schemas.empty().add_schema(Person, pydantic_schema(Person))
    person = JsonParser(schemas).decode_or_fail(text, Person)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from json_typed.exceptions import JsonValueError
from json_typed.result import Err, Ok, Result
from json_typed.schemas.schema import JsonSchema, object_schema
from json_typed.tyspec import TySpec, as_spec

try:
    import pydantic

    HAS_PYDANTIC = True
except ImportError:
    HAS_PYDANTIC = False

if TYPE_CHECKING:
    from pydantic import BaseModel as BaseModelType

    from json_typed.schemas.registry import Schemas
    from json_typed.value.types import JsonValue

T = TypeVar("T", bound="BaseModelType")


class PydanticSchemaBuilder(Generic[T]):
    """
    Builds object schemas that produce Pydantic model instances.

    JSON keys are the field aliases when set, else the field names, unless
    ``field_mapping`` overrides them. Fields that are not required are
    optional keys. Values are decoded by their annotations first; the model
    then validates the result, and a validation failure becomes a
    ``JsonValueError``.

    Example:
        from pydantic import BaseModel

        class Person(BaseModel):
            name: str
            email: str

        schema = pydantic_schema(Person, {"email": "e-mail"})

    """

    __slots__ = (
        "_model",
        "_field_mapping",
        "_validate",
        "_description",
        "_keys",
        "_aliases",
        "_specs",
        "_optional",
    )

    def __init__(
        self,
        model: type[T],
        field_mapping: dict[str, str] | None = None,
        validate: bool = True,
        description: str | None = None,
    ) -> None:
        if not HAS_PYDANTIC:
            raise ImportError(
                "Pydantic is required for pydantic_schema. "
                "Install it with: pip install pydantic"
            )
        self._model = model
        self._field_mapping = field_mapping or {}
        self._validate = validate
        self._description = description or model.__name__

        self._keys: dict[str, str] = {}  # JSON key -> field name
        self._aliases: dict[str, str] = {}  # JSON key -> validation alias
        self._specs: dict[str, TySpec] = {}
        self._optional: list[str] = []
        for name, info in model.model_fields.items():
            key = self._field_mapping.get(name) or info.alias or name
            self._keys[key] = name
            self._aliases[key] = info.alias or name
            self._specs[key] = as_spec(info.annotation)
            if not info.is_required():
                self._optional.append(key)

    def _assemble(self, decoded: dict[str, Any]) -> T:
        if self._validate:
            return self._model.model_validate(
                {self._aliases[key]: v for key, v in decoded.items()}
            )
        return self._model.model_construct(
            **{self._keys[key]: v for key, v in decoded.items()}
        )

    def build(self) -> JsonSchema[T]:
        inner = object_schema(
            self._description, self._specs, lambda decoded: decoded, optional=self._optional
        )

        def on_object(value: JsonValue, schemas: Schemas) -> Result:
            result = inner.decode(value, schemas)
            if isinstance(result, Err):
                return result
            try:
                return Ok(self._assemble(result.value))
            except pydantic.ValidationError as e:
                return Err(JsonValueError(self._description, value, str(e)))

        return JsonSchema(self._description, on_object, inner.shape)


def pydantic_schema(
    model: type[T],
    field_mapping: dict[str, str] | None = None,
    validate: bool = True,
    description: str | None = None,
) -> JsonSchema[T]:
    """
    Create a Pydantic object schema.

    Args:
        model: The Pydantic model class to instantiate.
        field_mapping: Optional mapping from field names to JSON keys.
        validate: If True (default), validate through the model.
                 If False, use model_construct() for faster creation without validation.
        description: Name used in diagnostics (defaults to the model name).

    Returns:
        A schema producing ``model`` instances.

    Raises:
        ImportError: If Pydantic is not installed.

    """
    return PydanticSchemaBuilder(model, field_mapping, validate, description).build()
