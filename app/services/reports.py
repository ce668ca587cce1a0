"""Report submission and retrieval, with wall-clock times normalized to the report timezone."""

import logging
from datetime import UTC, date, datetime, time, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from app.models import Report, Role
from app.schemas.auth import CurrentUser
from app.schemas.report import ReportOut, ReportSubmission
from app.services.errors import ValidationError
from app.services.photo_storage import UploadedPhoto, delete_photo, public_photo_path, save_photo

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

TIME_OF_DAY_FORMATS = ("%H:%M:%S", "%H:%M")
TIME_OF_DAY_OUTPUT = "%H:%M:%S"
# Wall-clock times are anchored to this date before conversion.
REFERENCE_DATE = date(1970, 1, 1)


def _zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {tz_name}") from e


def normalize_time_of_day(raw_time: str, tz_name: str) -> str:
    """
    Interpret raw_time (HH:MM:SS or HH:MM) as a UTC wall-clock time on a fixed
    reference date and return the same instant as HH:MM:SS in tz_name.

    The result does not depend on the host timezone. Raises ValidationError
    when raw_time is not a valid time of day.
    """
    value = (raw_time or "").strip()
    parsed: datetime | None = None
    for fmt in TIME_OF_DAY_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
            break
        except ValueError:
            continue
    if parsed is None:
        raise ValidationError(f"Invalid time format: {raw_time!r} (expected HH:MM:SS)")

    anchored = datetime.combine(REFERENCE_DATE, parsed.time(), tzinfo=UTC)
    return anchored.astimezone(_zone(tz_name)).strftime(TIME_OF_DAY_OUTPUT)


def today_window(tz_name: str, now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Civil "today" in tz_name as a half-open UTC interval [start, end).

    now defaults to the current time; naive values are taken as UTC.
    """
    zone = _zone(tz_name)
    current = now or datetime.now(UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    local_day = current.astimezone(zone).date()
    start = datetime.combine(local_day, time.min, tzinfo=zone)
    end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=zone)
    return start.astimezone(UTC), end.astimezone(UTC)


def to_report_out(report: Report, settings: "Settings") -> ReportOut:
    """Map a stored report to its API shape, rewriting the photo to a servable path."""
    return ReportOut(
        id=report.id,
        user_id=report.user_id,
        location=report.location,
        name=report.name,
        report_date=report.report_date,
        photo=public_photo_path(report.photo, settings),
        submission_time=report.submission_time,
        end_time=report.end_time,
        description=report.description,
        created_at=report.created_at,
        updated_at=report.updated_at,
    )


def _required(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


def build_report(
    identity: CurrentUser, submission: ReportSubmission, settings: "Settings"
) -> Report:
    """Validate and normalize a submission into an unsaved Report owned by identity."""
    if not submission.submission_time or not submission.submission_time.strip():
        raise ValidationError("Invalid submission time.")
    tz_name = settings.REPORT_TIMEZONE
    submission_time = normalize_time_of_day(submission.submission_time, tz_name)
    end_time = (
        normalize_time_of_day(submission.end_time, tz_name)
        if submission.end_time and submission.end_time.strip()
        else None
    )

    report_date: date | None = None
    if submission.date and submission.date.strip():
        try:
            report_date = date.fromisoformat(submission.date.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid report date: {submission.date!r}") from e

    return Report(
        user_id=identity.id,
        name=_required(submission.customer_name, "Customer name is required."),
        location=_required(submission.location, "Location is required."),
        description=_required(submission.description, "Description is required."),
        report_date=report_date,
        submission_time=time.fromisoformat(submission_time),
        end_time=time.fromisoformat(end_time) if end_time else None,
    )


def submit_report(
    db: Session,
    identity: CurrentUser,
    submission: ReportSubmission,
    settings: "Settings",
    photo: UploadedPhoto | None = None,
) -> ReportOut:
    """
    Validate, store the optional photo, and persist a new report.

    Input is validated before anything is written. If persisting fails the
    stored photo is removed and the error propagates.
    """
    report = build_report(identity, submission, settings)
    if photo is not None and photo.filename:
        report.photo = save_photo(photo, settings)

    db.add(report)
    try:
        db.commit()
    except Exception:
        db.rollback()
        delete_photo(report.photo, settings)
        raise
    db.refresh(report)
    logger.info(
        "Report submitted",
        extra={"report_id": report.id, "user_id": identity.id, "has_photo": bool(report.photo)},
    )
    return to_report_out(report, settings)


def list_reports_for_requester(
    db: Session, identity: CurrentUser, settings: "Settings"
) -> list[ReportOut]:
    """Admins see every report; users see only their own. Newest first."""
    match identity.role:
        case Role.ADMIN:
            query = db.query(Report)
        case Role.USER:
            query = db.query(Report).filter(Report.user_id == identity.id)
    reports = query.order_by(Report.created_at.desc()).all()
    return [to_report_out(r, settings) for r in reports]


def list_today_reports(
    db: Session, settings: "Settings", now: datetime | None = None
) -> list[ReportOut]:
    """Reports created during today's date in REPORT_TIMEZONE, newest first."""
    start, end = today_window(settings.REPORT_TIMEZONE, now)
    reports = (
        db.query(Report)
        .filter(Report.created_at >= start, Report.created_at < end)
        .order_by(Report.created_at.desc())
        .all()
    )
    return [to_report_out(r, settings) for r in reports]
