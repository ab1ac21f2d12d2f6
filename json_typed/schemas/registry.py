"""Schema registry mapping custom specification identities to schema factories."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from json_typed.exceptions import SchemaConfigurationError
from json_typed.tyspec import TySpec, as_spec, identity_name, is_native

if TYPE_CHECKING:
    from json_typed.schemas.schema import JsonSchema

logger = logging.getLogger(__name__)

# Type alias for schema factory functions
SchemaBuilder = Callable[..., "JsonSchema[Any]"]


@dataclass(frozen=True, slots=True)
class SchemaFactory:
    """
    A registered way of producing a schema from specification arguments.

    Attributes:
        build: Called with exactly ``params`` specifications
        params: Number of specifications ``build`` receives
        defaults: Specifications filling missing trailing arguments
        name: Identity name used in configuration errors

    """

    build: SchemaBuilder
    params: int = 0
    defaults: tuple[TySpec, ...] = ()
    name: str = ""

    @property
    def min_args(self) -> int:
        return self.params - len(self.defaults)

    @property
    def max_args(self) -> int:
        return self.params

    def __call__(self, args: tuple[TySpec, ...] = ()) -> JsonSchema[Any]:
        """
        Produce a schema for ``args``.

        Raises:
            SchemaConfigurationError: If the argument count is out of range

        """
        if not self.min_args <= len(args) <= self.max_args:
            if self.min_args == self.max_args:
                expected = str(self.max_args)
            else:
                expected = f"{self.min_args} to {self.max_args}"
            raise SchemaConfigurationError(
                f"Schema {self.name} "
                f"takes {expected} specification argument(s), got {len(args)}"
            )
        missing = self.params - len(args)
        full = tuple(args) + self.defaults[len(self.defaults) - missing :]
        return self.build(*full)


class Schemas:
    """
    Immutable registry of custom schemas.

    Adding a schema returns a new registry; the receiver is never modified,
    so a parser bound to one registry is unaffected by later additions.

    Example:
        schemas = Schemas.empty().add_schema(Person, person_schema)
        schemas = schemas.add_schema(Box, box_factory, params=1, defaults=(ANY,))
        factory = schemas.resolve(Person)

    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[Hashable, SchemaFactory] | None = None) -> None:
        self._entries: dict[Hashable, SchemaFactory] = dict(entries or {})

    @classmethod
    def empty(cls) -> Schemas:
        """Get a registry with no custom schemas."""
        return cls()

    def add_schema(
        self,
        identity: Hashable,
        schema: JsonSchema[Any] | SchemaBuilder,
        *,
        params: int | None = None,
        defaults: tuple[Any, ...] = (),
    ) -> Schemas:
        """
        Return a registry equal to this one plus ``identity``.

        Re-adding an identity replaces the earlier entry.

        Args:
            identity: The specification identity (a class, Symbol, ...)
            schema: A fixed schema, or a factory taking ``params`` specifications
            params: Number of specifications the factory receives (default 1
                for factories; fixed schemas always take 0)
            defaults: Specifications used for missing trailing arguments

        Returns:
            The extended registry

        Raises:
            SchemaConfigurationError: If the arity declaration is invalid

        """
        from json_typed.schemas.schema import JsonSchema

        try:
            hash(identity)
        except TypeError as e:
            raise SchemaConfigurationError(
                f"Schema identity {identity!r} is not hashable"
            ) from e

        default_specs = tuple(as_spec(d) for d in defaults)
        if isinstance(schema, JsonSchema):
            if params not in (None, 0) or default_specs:
                raise SchemaConfigurationError(
                    f"A fixed schema for {identity_name(identity)} takes no arguments"
                )
            fixed = schema
            factory = SchemaFactory(lambda: fixed, 0, (), identity_name(identity))
        elif callable(schema):
            params = 1 if params is None else params
            if params < 0:
                raise SchemaConfigurationError(f"params must be >= 0, got {params}")
            if len(default_specs) > params:
                raise SchemaConfigurationError(
                    f"{len(default_specs)} defaults given for {params} parameter(s)"
                )
            factory = SchemaFactory(schema, params, default_specs, identity_name(identity))
        else:
            raise SchemaConfigurationError(
                f"Expected a JsonSchema or a factory for {identity_name(identity)}, "
                f"got {type(schema).__name__}"
            )

        if is_native(identity):
            logger.warning(
                "%s is always read natively; the schema registered for it is ignored",
                identity_name(identity),
            )
        if identity in self._entries:
            logger.debug("Replacing schema registered for %s", identity_name(identity))

        entries = dict(self._entries)
        entries[identity] = factory
        return self.__class__(entries)

    def resolve(self, identity: Hashable) -> SchemaFactory | None:
        """
        Get the factory registered for an identity.

        Returns:
            The factory or None

        """
        try:
            return self._entries.get(identity)
        except TypeError:
            return None

    def identities(self) -> list[Hashable]:
        """Get all registered identities, in registration order."""
        return list(self._entries)

    def __contains__(self, identity: object) -> bool:
        return self.resolve(identity) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __repr__(self) -> str:
        names = ", ".join(identity_name(i) for i in self._entries)
        return f"Schemas({names})"
