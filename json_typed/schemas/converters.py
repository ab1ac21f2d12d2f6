"""Ready-made schemas for common Python types carried as JSON scalars."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from json_typed.schemas.registry import Schemas
from json_typed.schemas.schema import JsonSchema, scalar_schema
from json_typed.value.types import JsonType


# Helper converter functions - defined first so they can be used in the schemas
def _to_datetime(value: str) -> datetime:
    """Convert an ISO 8601 string to an aware datetime (naive values are UTC)."""
    s = value
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _to_date(value: str) -> date:
    """Convert an ISO 8601 calendar date."""
    return date.fromisoformat(value)


def _to_uuid(value: str) -> UUID:
    """Convert a UUID string (any form accepted by ``uuid.UUID``)."""
    return UUID(value)


def _to_decimal(value: str) -> Decimal:
    """Convert a decimal string without going through float."""
    try:
        result = Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a decimal number") from e
    if not result.is_finite():
        raise ValueError(f"{value!r} is not a finite decimal number")
    return result


datetime_schema: JsonSchema[datetime] = scalar_schema("datetime", JsonType.STRING, _to_datetime)
date_schema: JsonSchema[date] = scalar_schema("date", JsonType.STRING, _to_date)
uuid_schema: JsonSchema[UUID] = scalar_schema("UUID", JsonType.STRING, _to_uuid)
decimal_schema: JsonSchema[Decimal] = scalar_schema("decimal", JsonType.STRING, _to_decimal)


def _register_defaults(schemas: Schemas) -> Schemas:
    """Register the default scalar schemas, keyed by their Python types."""
    return (
        schemas.add_schema(datetime, datetime_schema)
        .add_schema(date, date_schema)
        .add_schema(UUID, uuid_schema)
        .add_schema(Decimal, decimal_schema)
    )


# Default registry: datetime, date, UUID and Decimal
default_schemas = _register_defaults(Schemas.empty())
