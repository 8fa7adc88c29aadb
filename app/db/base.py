"""
SQLAlchemy declarative base and metadata.
Challenge: Single place for content store tables and migrations.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for content store models (posts, terms). Enables Alembic migrations."""

    pass
