"""
Custom schemas for json-typed.

This module provides tools for describing how custom specifications are
decoded: schema constructors for objects, arrays and scalars, the
immutable schema registry, and factories deriving schemas from
dataclasses and Pydantic models.

Usage:
    from json_typed.schemas import (
        # Schema constructors
        JsonSchema,
        object_schema,
        array_schema,
        scalar_schema,

        # Registry
        Schemas,
        SchemaFactory,
        default_schemas,

        # Class-derived schemas
        dataclass_schema,
    )

Example:
    from json_typed import ANY, JsonParser, custom
    from json_typed.schemas import Schemas, array_schema, object_schema

    class Basic:
        def __init__(self, p: bool) -> None:
            self.p = p

    class MyArray:
        def __init__(self, arr: list) -> None:
            self.arr = arr

    schemas = (
        Schemas.empty()
        .add_schema(Basic, object_schema("Basic", {"p": bool}, lambda o: Basic(o["p"])))
        .add_schema(MyArray, lambda t: array_schema("MyArray", t, MyArray), defaults=(ANY,))
    )

    parser = JsonParser(schemas)
    boxed = parser.decode_or_fail('[{"p": true}]', custom(MyArray, Basic))
"""

from json_typed.schemas.converters import (
    date_schema,
    datetime_schema,
    decimal_schema,
    default_schemas,
    uuid_schema,
)
from json_typed.schemas.factories import DataclassSchemaBuilder, dataclass_schema
from json_typed.schemas.registry import SchemaBuilder, SchemaFactory, Schemas
from json_typed.schemas.schema import (
    JsonSchema,
    array_schema,
    object_schema,
    scalar_schema,
)

__all__ = [
    # Schema constructors
    "JsonSchema",
    "object_schema",
    "array_schema",
    "scalar_schema",
    # Registry
    "Schemas",
    "SchemaFactory",
    "SchemaBuilder",
    # Scalar schemas
    "datetime_schema",
    "date_schema",
    "uuid_schema",
    "decimal_schema",
    "default_schemas",
    # Class-derived schemas
    "DataclassSchemaBuilder",
    "dataclass_schema",
]
