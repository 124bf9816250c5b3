"""Shared schema plumbing — camelCase aliasing and UTC datetime output.

Invariants:
    - Every API model accepts both camelCase (wire) and snake_case (Python) names
    - Datetimes serialize as ISO-8601 with an explicit offset; naive values
      (SQLite drops tzinfo) are read as UTC
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_iso(value: datetime) -> str:
    return as_utc(value).isoformat()


UtcDatetime = Annotated[datetime, PlainSerializer(utc_iso, return_type=str)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )
