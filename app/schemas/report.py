"""Request/response schemas for report endpoints."""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field


class ReportSubmission(BaseModel):
    """Form fields of POST /reports/submit (the photo file travels separately)."""

    model_config = ConfigDict(populate_by_name=True)

    customer_name: str | None = Field(default=None, alias="customerName")
    date: str | None = None
    location: str | None = None
    submission_time: str | None = Field(default=None, alias="submissionTime")
    end_time: str | None = Field(default=None, alias="endTime")
    description: str | None = None


class ReportOut(BaseModel):
    """Report as returned by the API; photo is a servable path or null."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str = Field(alias="userId")
    location: str
    name: str
    report_date: date | None = Field(default=None, alias="date")
    photo: str | None = None
    submission_time: time = Field(alias="submissionTime")
    end_time: time | None = Field(default=None, alias="endTime")
    description: str
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ReportSubmitResponse(BaseModel):
    """Response for a successful submission."""

    message: str = "Report submitted successfully"
    report: ReportOut
