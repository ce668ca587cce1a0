"""ORM model for application users (auth and RBAC)."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow


class Role(str, enum.Enum):
    """Closed set of account roles."""

    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    The username column carries the unique index; it is the only authority
    on uniqueness. Deleting a user deletes the reports it owns.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USER,
    )
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    odoo_batch_id = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    reports = relationship(
        "Report",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
