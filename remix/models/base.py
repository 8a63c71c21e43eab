"""Declarative Base; alembic autogenerate reads its metadata."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for the user, recipe and remix tables."""
