"""Report endpoints: submit (multipart with optional photo), list, and today's roster."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.report import ReportOut, ReportSubmission, ReportSubmitResponse
from app.services import reports as report_service
from app.services.errors import ServiceError

router = APIRouter()


@router.post("/submit", response_model=ReportSubmitResponse, status_code=201)
def submit_report(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    customer_name: Annotated[str | None, Form(alias="customerName")] = None,
    date: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    submission_time: Annotated[str | None, Form(alias="submissionTime")] = None,
    end_time: Annotated[str | None, Form(alias="endTime")] = None,
    description: Annotated[str | None, Form()] = None,
    photo: Annotated[UploadFile | None, File()] = None,
) -> ReportSubmitResponse:
    """
    Submit a report as multipart/form-data.

    submissionTime (HH:MM:SS) is required; endTime is optional. Both are
    entered as UTC clock times and stored in the report timezone. An optional
    image can be attached in the `photo` field.
    """
    submission = ReportSubmission(
        customer_name=customer_name,
        date=date,
        location=location,
        submission_time=submission_time,
        end_time=end_time,
        description=description,
    )
    try:
        report = report_service.submit_report(db, current_user, submission, settings, photo=photo)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ReportSubmitResponse(report=report)


@router.get("", response_model=list[ReportOut])
def list_reports(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[ReportOut]:
    """Own reports for users, all reports for admins; newest first."""
    return report_service.list_reports_for_requester(db, current_user, settings)


@router.get("/daily", response_model=list[ReportOut])
def list_daily_reports(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[ReportOut]:
    """Reports created today in the report timezone (admin only)."""
    return report_service.list_today_reports(db, settings)
