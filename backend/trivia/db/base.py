"""Database base and model registry."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# Import all models here so Alembic and the content store can see every table
import trivia.models.content  # noqa: E402, F401
