"""JWT login and auth dependencies (get_current_user, require_role, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    verify_password,
)
from app.models import Role, User
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    username = (body.username or "").strip()
    if not username or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter both username and password",
        )

    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"username": username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    token = create_access_token(sub=user.id, role=user.role, settings=settings)
    logger.info("Login succeeded", extra={"user_id": user.id, "role": user.role.value})
    return LoginResponse(token=token, role=user.role)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the current user.

    Raises 401 when the header is missing or not a Bearer credential, when the
    token fails verification, or when its subject no longer exists. The
    resolved user is also stored on request.state.current_user.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized, no token provided")
    try:
        claims = decode_access_token(credentials.credentials, settings)
    except InvalidTokenError as e:
        logger.debug("Token rejected: %s", e.message)
        raise _unauthorized("Not authorized, token failed") from e

    row = (
        db.query(User.id, User.username, User.role, User.first_name, User.last_name)
        .filter(User.id == claims.subject_id)
        .first()
    )
    if row is None:
        raise _unauthorized("User not found for this token")
    current_user = CurrentUser.model_validate(row)
    request.state.current_user = current_user
    return current_user


def require_role(role: Role):
    """Build a dependency that allows only authenticated users with the given role."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Requires '{role.value}' role.",
            )
        return current_user

    return dependency


require_admin = require_role(Role.ADMIN)
