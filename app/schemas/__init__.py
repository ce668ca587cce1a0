"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.schemas.health import HealthResponse
from app.schemas.report import ReportOut, ReportSubmission, ReportSubmitResponse
from app.schemas.user import UserCreate, UserOut, UserUpdate

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ReportOut",
    "ReportSubmission",
    "ReportSubmitResponse",
    "UserCreate",
    "UserOut",
    "UserUpdate",
]
