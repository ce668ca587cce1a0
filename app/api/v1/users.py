"""User directory endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.services import users as user_service
from app.services.errors import ServiceError

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("", response_model=list[UserOut])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List all users. Passwords are never included."""
    return user_service.list_users(db)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """
    Create a user. username, role and password are required; firstName,
    lastName, position and odooBatchId are optional. A taken username is a 400.
    """
    try:
        return user_service.create_user(db, body)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    user = user_service.get_user(db, user_id)
    if user is None:
        raise _not_found()
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    body: UserUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Partially update a user; a new password is re-hashed."""
    try:
        user = user_service.update_user(db, user_id, body)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    if user is None:
        raise _not_found()
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a user together with all of its reports."""
    if not user_service.delete_user(db, user_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
