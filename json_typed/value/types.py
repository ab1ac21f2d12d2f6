"""JSON value model."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Union


class JsonType(Enum):
    """Tag naming the kind of a JSON value."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"


class _JsonValueBase:
    """Behaviour shared by every JSON value variant."""

    __slots__ = ()

    type: ClassVar[JsonType]

    def unwrap(self) -> Any:
        """Return the underlying Python value, without descending into containers."""
        raise NotImplementedError

    def to_python(self) -> Any:
        """Return plain Python data (lists, dicts and scalars) for the whole tree."""
        return self.unwrap()

    def render(self) -> str:
        """Compact JSON rendering used in diagnostics, e.g. ``[1,2]``."""
        return json.dumps(self.to_python(), separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class JsonNull(_JsonValueBase):
    type: ClassVar[JsonType] = JsonType.NULL

    def unwrap(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class JsonBoolean(_JsonValueBase):
    value: bool
    type: ClassVar[JsonType] = JsonType.BOOLEAN

    def unwrap(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonNumber(_JsonValueBase):
    value: int | float
    type: ClassVar[JsonType] = JsonType.NUMBER

    def unwrap(self) -> int | float:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonString(_JsonValueBase):
    value: str
    type: ClassVar[JsonType] = JsonType.STRING

    def unwrap(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonArray(_JsonValueBase):
    items: tuple[JsonValue, ...] = ()
    type: ClassVar[JsonType] = JsonType.ARRAY

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def __getitem__(self, index: int) -> JsonValue:
        return self.items[index]

    def unwrap(self) -> tuple[JsonValue, ...]:
        return self.items

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True, eq=False)
class JsonObject(_JsonValueBase):
    """
    A JSON object.

    Keys keep the order in which they appeared in the input. The mapping is
    exposed read-only.
    """

    fields: Mapping[str, JsonValue] = field(default_factory=dict)
    type: ClassVar[JsonType] = JsonType.OBJECT

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return list(self.fields.items()) == list(other.fields.items())

    def __hash__(self) -> int:
        return hash(tuple(self.fields.items()))

    def __reduce__(self) -> tuple[Any, ...]:
        # mappingproxy cannot be pickled
        return (self.__class__, (dict(self.fields),))

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def get(self, key: str) -> JsonValue | None:
        return self.fields.get(key)

    def keys(self) -> list[str]:
        return list(self.fields)

    def unwrap(self) -> Mapping[str, JsonValue]:
        return self.fields

    def to_python(self) -> dict[str, Any]:
        return {k: v.to_python() for k, v in self.fields.items()}


# JSON value type - the closed set of variants produced by the reader
JsonValue = Union[
    JsonNull,
    JsonBoolean,
    JsonNumber,
    JsonString,
    JsonArray,
    JsonObject,
]

JSON_NULL = JsonNull()
