"""Request/response schemas for user directory endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


class UserCreate(BaseModel):
    """
    Body for POST /users.

    Required fields are optional here so the service can answer missing ones
    with a 400 instead of a schema error. Profile fields accept the camelCase
    names the web client sends.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    role: str | None = None
    password: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    position: str | None = None
    odoo_batch_id: str | None = Field(default=None, alias="odooBatchId")


class UserUpdate(BaseModel):
    """Partial update for PUT /users/{id}; only fields that are sent are applied."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    role: str | None = None
    password: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    position: str | None = None
    odoo_batch_id: str | None = Field(default=None, alias="odooBatchId")


class UserOut(BaseModel):
    """User as returned by the API. There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: Role
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    odoo_batch_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
