__version__ = "0.1.0"

from json_typed.engine import load_as
from json_typed.exceptions import (
    JsonParseError,
    JsonSyntaxError,
    JsonTypedError,
    JsonTypeError,
    JsonValueError,
    MissingKeysError,
    SchemaConfigurationError,
    UnknownKeysError,
    UnknownSpecError,
)
from json_typed.parser import JsonParser, decode, decode_or_fail
from json_typed.result import Err, Ok, Result
from json_typed.schemas import (
    JsonSchema,
    Schemas,
    array_schema,
    dataclass_schema,
    default_schemas,
    object_schema,
    scalar_schema,
)
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
    Bare,
    Custom,
    MapOf,
    ObjectOf,
    Primitive,
    SetOf,
    Symbol,
    TupleOf,
    TySpec,
    any_of,
    array_of,
    as_spec,
    custom,
    describe,
    map_of,
    object_of,
    set_of,
    tuple_of,
)
from json_typed.value import JsonType, JsonValue, loads, to_json_value

__all__ = [
    # Parser
    "JsonParser",
    "decode",
    "decode_or_fail",
    "load_as",
    "Ok",
    "Err",
    "Result",
    # Values
    "loads",
    "to_json_value",
    "JsonType",
    "JsonValue",
    # Specifications
    "TySpec",
    "Primitive",
    "Bare",
    "ArrayOf",
    "ObjectOf",
    "MapOf",
    "SetOf",
    "TupleOf",
    "AnyOf",
    "Custom",
    "Symbol",
    "BOOLEAN",
    "NUMBER",
    "STRING",
    "NULL",
    "ANY",
    "ARRAY",
    "OBJECT",
    "as_spec",
    "describe",
    "array_of",
    "object_of",
    "map_of",
    "set_of",
    "tuple_of",
    "any_of",
    "custom",
    # Schemas
    "JsonSchema",
    "Schemas",
    "object_schema",
    "array_schema",
    "scalar_schema",
    "dataclass_schema",
    "default_schemas",
    # Exceptions
    "JsonTypedError",
    "JsonSyntaxError",
    "SchemaConfigurationError",
    "JsonParseError",
    "JsonTypeError",
    "MissingKeysError",
    "UnknownKeysError",
    "UnknownSpecError",
    "JsonValueError",
    # Version
    "__version__",
]
