"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.report import Report
from app.models.user import Role, User

__all__ = ["Base", "Report", "Role", "User"]
