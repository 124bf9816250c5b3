"""Database Base — declarative base shared by every ORM model.

Invariants:
    - All models inherit from db.base.Base
    - Alembic reads Base.metadata after importing campuspool.models
"""
