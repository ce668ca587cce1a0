"""ORM model for submitted field reports."""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Time, func
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow


class Report(Base):
    """
    One field submission owned by a user.

    submission_time and end_time hold wall-clock times already converted to
    the report timezone; photo holds the stored file name, not a URL.
    """

    __tablename__ = "reports"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    location = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    report_date = Column(Date, nullable=True)
    photo = Column(String(1024), nullable=True)
    submission_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=True)
    description = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="reports")
