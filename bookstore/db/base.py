"""SQLAlchemy Declarative Base — shared metadata for ORM models and migrations.

Invariants:
    - All models inherit from Base
    - Constraint and index names are deterministic (NAMING_CONVENTION), so
      Alembic revisions can drop or alter them by name on any backend
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all Bookstore ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
