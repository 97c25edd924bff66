"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from container_tracker.models import container as _container  # noqa: E402,F401
from container_tracker.models import user as _user  # noqa: E402,F401
