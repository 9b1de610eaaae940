"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy import Boolean, Column, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class EntityMixin:
    """
    Columns every persisted entity carries.

    retired is a soft delete: retired rows stay addressable by id for existing
    references but are excluded from lookups and listings. It is terminal.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    retired = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def retire(self) -> None:
        self.retired = True
