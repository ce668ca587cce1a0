"""SQLAlchemy declarative Base and shared model configuration."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def utcnow() -> datetime:
    """Timezone-aware current time used for created/updated columns."""
    return datetime.now(UTC)
