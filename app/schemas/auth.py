"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


class LoginRequest(BaseModel):
    """Credentials for login. Missing fields are reported by the route as 400."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    message: str = Field(default="Logged in successfully")
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    role: Role


class CurrentUser(BaseModel):
    """Authenticated user (no password) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: Role
    first_name: str | None = None
    last_name: str | None = None
