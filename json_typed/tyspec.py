"""Type specifications describing the shape to decode a JSON value into."""

from __future__ import annotations

import types
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union, get_args, get_origin


class Primitive(Enum):
    """Specifications matching a single JSON scalar kind (or anything)."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    NULL = "null"
    ANY = "any"


class Bare(Enum):
    """Unparametrized containers, shorthand for their ``ANY`` forms."""

    ARRAY = "array"
    OBJECT = "object"


# Convenience aliases
BOOLEAN = Primitive.BOOLEAN
NUMBER = Primitive.NUMBER
STRING = Primitive.STRING
NULL = Primitive.NULL
ANY = Primitive.ANY
ARRAY = Bare.ARRAY
OBJECT = Bare.OBJECT


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """A JSON array whose elements all match ``element``; decodes to a list."""

    element: TySpec = ANY


@dataclass(frozen=True, slots=True)
class ObjectOf:
    """A JSON object whose values all match ``value``; decodes to a dict."""

    value: TySpec = ANY


@dataclass(frozen=True, slots=True)
class MapOf:
    """
    A JSON object read as a dictionary from ``key`` to ``value``.

    Only ``STRING`` keys can be decoded; any other key specification fails
    with an unknown specification error.
    """

    key: TySpec = STRING
    value: TySpec = ANY


@dataclass(frozen=True, slots=True)
class SetOf:
    """A JSON array read as a set of ``element``."""

    element: TySpec = ANY


@dataclass(frozen=True, slots=True)
class TupleOf:
    """A JSON array of exactly ``len(elements)`` items, item i matching ``elements[i]``."""

    elements: tuple[TySpec, ...] = ()


@dataclass(frozen=True, slots=True)
class AnyOf:
    """Matches the first of ``alternatives`` that succeeds."""

    alternatives: tuple[TySpec, ...] = ()


@dataclass(frozen=True, slots=True)
class Custom:
    """
    A specification resolved through a schema registry.

    Attributes:
        identity: Registry key (a class, a ``Symbol`` or any hashable token)
        args: Specifications passed to the registered schema factory

    """

    identity: Hashable
    args: tuple[TySpec, ...] = ()


class Symbol:
    """
    Opaque token usable as a custom specification identity.

    Symbols compare by identity: two symbols with the same name are different
    keys.

    Example:
        POINT = Symbol("Point")
        schemas = Schemas.empty().add_schema(POINT, point_schema)
        parser.decode_or_fail("[1, 2]", custom(POINT))
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


# Type specification - the closed set of specification variants
TySpec = Union[Primitive, Bare, ArrayOf, ObjectOf, MapOf, SetOf, TupleOf, AnyOf, Custom]

_SPEC_TYPES = (Primitive, Bare, ArrayOf, ObjectOf, MapOf, SetOf, TupleOf, AnyOf, Custom)


def desugar(spec: TySpec) -> TySpec:
    """Replace bare containers with their ``ANY``-parametrized forms."""
    if spec is Bare.ARRAY:
        return ArrayOf(ANY)
    if spec is Bare.OBJECT:
        return ObjectOf(ANY)
    return spec


def identity_name(identity: Any) -> str:
    """Human-readable name for a custom identity."""
    if isinstance(identity, Symbol):
        return identity.name
    name = getattr(identity, "__name__", None)
    if isinstance(name, str):
        return name
    return str(identity)


def describe(spec: TySpec) -> str:
    """
    Describe a specification for diagnostics.

    Examples:
        >>> describe(ArrayOf(BOOLEAN))
        'array of boolean'
        >>> describe(AnyOf((NUMBER, BOOLEAN)))
        'number or boolean'
    """
    if isinstance(spec, (Primitive, Bare)):
        return spec.value
    if isinstance(spec, ArrayOf):
        if spec.element is ANY:
            return "array"
        return f"array of {describe(spec.element)}"
    if isinstance(spec, ObjectOf):
        if spec.value is ANY:
            return "object"
        return f"object of {describe(spec.value)}"
    if isinstance(spec, MapOf):
        return f"map from {describe(spec.key)} to {describe(spec.value)}"
    if isinstance(spec, SetOf):
        if spec.element is ANY:
            return "set"
        return f"set of {describe(spec.element)}"
    if isinstance(spec, TupleOf):
        return "tuple of (" + ", ".join(describe(e) for e in spec.elements) + ")"
    if isinstance(spec, AnyOf):
        if not spec.alternatives:
            return "nothing"
        return " or ".join(describe(a) for a in spec.alternatives)
    if isinstance(spec, Custom):
        name = identity_name(spec.identity)
        if spec.args:
            return f"{name} of " + ", ".join(describe(a) for a in spec.args)
        return name
    raise TypeError(f"Not a type specification: {spec!r}")


# Python types read natively, never looked up in a schema registry
_NATIVE: dict[Any, TySpec] = {
    bool: BOOLEAN,
    int: NUMBER,
    float: NUMBER,
    str: STRING,
    type(None): NULL,
    Any: ANY,
    list: ARRAY,
    dict: OBJECT,
    set: SetOf(ANY),
    frozenset: SetOf(ANY),
}


def is_native(obj: Any) -> bool:
    """Whether ``as_spec`` translates ``obj`` without consulting a registry."""
    try:
        return obj is None or obj in _NATIVE
    except TypeError:
        return False


def as_spec(obj: Any) -> TySpec:
    """
    Coerce a Python type annotation (or a specification) into a specification.

    Args:
        obj: A specification, a builtin type, a parametrized generic such as
            ``list[int]`` or ``dict[str, bool]``, a union, or any hashable
            identity for a custom schema.

    Returns:
        The corresponding specification.

    Raises:
        TypeError: If ``obj`` cannot be used as a registry key.

    Example:
        as_spec(list[bool])          # ArrayOf(BOOLEAN)
        as_spec(dict[str, int])      # MapOf(STRING, NUMBER)
        as_spec(int | None)          # AnyOf((NUMBER, NULL))
        as_spec(Person)              # Custom(Person)

    """
    if isinstance(obj, _SPEC_TYPES):
        return obj
    if obj is None:
        return NULL
    if is_native(obj):
        return _NATIVE[obj]

    origin = get_origin(obj)
    if origin is not None:
        params = get_args(obj)
        if origin is Union or origin is types.UnionType:
            return AnyOf(tuple(as_spec(p) for p in params))
        if origin is list:
            return ArrayOf(as_spec(params[0]) if params else ANY)
        if origin is dict:
            if not params:
                return MapOf()
            return MapOf(as_spec(params[0]), as_spec(params[1]))
        if origin in (set, frozenset):
            return SetOf(as_spec(params[0]) if params else ANY)
        if origin is tuple:
            if len(params) == 2 and params[1] is Ellipsis:
                return ArrayOf(as_spec(params[0]))
            return TupleOf(tuple(as_spec(p) for p in params))

    if not isinstance(obj, Hashable):
        raise TypeError(f"{obj!r} cannot be used as a type specification")
    return Custom(obj)


def array_of(element: Any = ANY) -> ArrayOf:
    return ArrayOf(as_spec(element))


def object_of(value: Any = ANY) -> ObjectOf:
    return ObjectOf(as_spec(value))


def map_of(key: Any = STRING, value: Any = ANY) -> MapOf:
    return MapOf(as_spec(key), as_spec(value))


def set_of(element: Any = ANY) -> SetOf:
    return SetOf(as_spec(element))


def tuple_of(*elements: Any) -> TupleOf:
    return TupleOf(tuple(as_spec(e) for e in elements))


def any_of(*alternatives: Any) -> AnyOf:
    return AnyOf(tuple(as_spec(a) for a in alternatives))


def custom(identity: Hashable, *args: Any) -> Custom:
    """Refer to a registered schema, passing ``args`` to its factory."""
    return Custom(identity, tuple(as_spec(a) for a in args))
