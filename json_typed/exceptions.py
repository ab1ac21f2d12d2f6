"""Custom exceptions for json-typed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from json_typed.tyspec import TySpec
    from json_typed.value.types import JsonValue

# Longest compact rendering shown in a trace line
_SEEN_LIMIT = 200


class JsonTypedError(Exception):
    """Base exception for json-typed."""


class JsonSyntaxError(JsonTypedError):
    """Raw text could not be read as JSON.

    Attributes:
        msg: The unformatted error message.
        pos: Offset in the input where reading failed, if known.
        lineno: Line corresponding to ``pos``, if known.
        colno: Column corresponding to ``pos``, if known.
    """

    def __init__(
        self,
        msg: str,
        pos: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
    ) -> None:
        self.msg = msg
        self.pos = pos
        self.lineno = lineno
        self.colno = colno
        if lineno is not None:
            super().__init__(f"{msg}: line {lineno} column {colno} (char {pos})")
        else:
            super().__init__(msg)


class SchemaConfigurationError(JsonTypedError):
    """A schema was registered or invoked in a way its factory does not accept."""


class Frame(NamedTuple):
    """One specification boundary crossed while a decode failed."""

    description: str
    seen: str
    location: str | int | None = None


def _render_location(location: str | int) -> str:
    if isinstance(location, int):
        return f"index {location}"
    return f"key `{location}`"


def _clip(text: str) -> str:
    if len(text) <= _SEEN_LIMIT:
        return text
    return text[: _SEEN_LIMIT - 3] + "..."


class JsonParseError(JsonTypedError):
    """
    A value could not be decoded against a specification.

    Errors are immutable: adding context with ``within`` or ``at`` returns a
    copy of the same class, so the error kind never changes while it travels
    up through nested specifications.

    Attributes:
        frames: Specification boundaries crossed, outermost first
        path: Keys and indices leading from the root to the failing value

    """

    frames: tuple[Frame, ...]

    def __init__(self, *args: Any) -> None:
        # args must match the subclass constructor for copy and pickle
        super().__init__(*args)
        self.frames = ()

    @property
    def reason(self) -> str:
        """Short, single-line description of the failure."""
        raise NotImplementedError

    @property
    def conclusion(self) -> str:
        """Final line of the trace."""
        raise NotImplementedError

    @property
    def path(self) -> tuple[str | int, ...]:
        return tuple(f.location for f in self.frames if f.location is not None)

    def _clone(self) -> JsonParseError:
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        other.args = self.args
        return other

    def within(self, description: str, value: JsonValue) -> JsonParseError:
        """Return a copy recording that ``value`` was being read as ``description``."""
        other = self._clone()
        other.frames = (Frame(description, _clip(value.render())),) + self.frames
        return other

    def at(self, location: str | int) -> JsonParseError:
        """Return a copy whose outermost frame sits at ``location`` in its parent."""
        other = self._clone()
        if self.frames:
            head = self.frames[0]._replace(location=location)
            other.frames = (head,) + self.frames[1:]
        else:
            other.frames = (Frame("", "", location),)
        return other

    def trace(self) -> list[str]:
        """Render the layered diagnostic, one line per entry."""
        lines: list[str] = []
        for i, frame in enumerate(self.frames):
            if i > 0 and frame.location is not None:
                lines.append(f"In the value at {_render_location(frame.location)}:")
            if frame.description:
                lines.append(
                    f"When trying to read a value for specification: `{frame.description}`"
                )
                lines.append(f"I saw: `{frame.seen}`")
        lines.append(self.conclusion)
        return lines

    def __str__(self) -> str:
        if not self.frames:
            return self.reason
        return "\n".join([self.reason, *self.trace()])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.reason!r}, path={self.path!r})"


class JsonTypeError(JsonParseError):
    """The value's type did not match what the specification required."""

    def __init__(self, expected: str, actual: str, value: JsonValue) -> None:
        super().__init__(expected, actual, value)
        self.expected = expected
        self.actual = actual
        self.value = value

    @property
    def reason(self) -> str:
        return f"expected: {self.expected}, but got: {self.actual}: {_clip(self.value.render())}"

    @property
    def conclusion(self) -> str:
        return f"But this is a `{self.actual}`"


class MissingKeysError(JsonParseError):
    """Declared object fields were absent, listed in declared order."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(keys)
        self.keys = list(keys)

    @property
    def reason(self) -> str:
        return "missing keys: " + ", ".join(self.keys)

    @property
    def conclusion(self) -> str:
        return "But the following keys are required and were not specified: " + ", ".join(
            self.keys
        )


class UnknownKeysError(JsonParseError):
    """Object keys not declared by the schema, listed in input order."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(keys)
        self.keys = list(keys)

    @property
    def reason(self) -> str:
        return "unknown keys: " + ", ".join(self.keys)

    @property
    def conclusion(self) -> str:
        return "But I saw the following keys which are not accepted: " + ", ".join(self.keys)


class UnknownSpecError(JsonParseError):
    """
    No decoding strategy exists for a specification.

    Raised for custom identities missing from the registry and for map key
    specifications other than string.
    """

    def __init__(self, spec: TySpec) -> None:
        super().__init__(spec)
        self.spec = spec

    @property
    def identity(self) -> Any:
        return getattr(self.spec, "identity", self.spec)

    @property
    def spec_args(self) -> tuple[TySpec, ...]:
        return getattr(self.spec, "args", ())

    @property
    def reason(self) -> str:
        from json_typed.tyspec import describe

        return f"unknown specification: {describe(self.spec)}"

    @property
    def conclusion(self) -> str:
        from json_typed.tyspec import Custom, describe

        if not isinstance(self.spec, Custom):
            return (
                f"But `{describe(self.spec)}` cannot be read as a key; "
                "only string map keys are supported"
            )
        return f"But no schema is registered for `{describe(self.spec)}`"


class JsonValueError(JsonParseError):
    """The value had the right shape but a schema rejected its content."""

    def __init__(self, description: str, value: JsonValue, detail: str) -> None:
        super().__init__(description, value, detail)
        self.description = description
        self.value = value
        self.detail = detail

    @property
    def reason(self) -> str:
        return f"invalid {self.description}: {self.detail}"

    @property
    def conclusion(self) -> str:
        return f"But {self.detail}"
