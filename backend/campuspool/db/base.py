"""Declarative Base — metadata and column defaults shared by the CampusPool tables.

Invariants:
    - Every model inherits from Base, so Alembic sees one MetaData
    - Constraint names are deterministic (naming convention), so migrations
      can drop them by name on Postgres and SQLite alike
    - Primary keys are uuid4 strings; timestamps are timezone-aware UTC
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def new_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
