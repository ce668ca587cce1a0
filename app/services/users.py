"""User directory: CRUD over user accounts plus first-run admin bootstrap."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from app.models import Role, User
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.services.errors import ConflictError, ValidationError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "position", "odoo_batch_id")


def _clean_username(username: str) -> str:
    username = username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise ValidationError(
            f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters."
        )
    return username


def _check_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")


def _parse_role(role: str | Role) -> Role:
    try:
        return Role(role.strip() if isinstance(role, str) else role)
    except ValueError:
        allowed = ", ".join(r.value for r in Role)
        raise ValidationError(f"Role must be one of: {allowed}.") from None


def _commit_or_conflict(db: Session, username: str) -> None:
    """Commit; a unique-index violation on username becomes ConflictError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Username already taken", extra={"username": username})
        raise ConflictError("Username already exists") from e


def list_users(db: Session) -> list[UserOut]:
    """Return all users ordered by username, without passwords."""
    users = db.query(User).order_by(User.username).all()
    return [UserOut.model_validate(u) for u in users]


def get_user(db: Session, user_id: str) -> UserOut | None:
    """Return one user without password, or None if absent."""
    user = db.get(User, user_id)
    return UserOut.model_validate(user) if user is not None else None


def create_user(db: Session, data: UserCreate) -> UserOut:
    """
    Create a user from admin-supplied data.

    Raises ValidationError when username, role or password is missing or
    invalid, and ConflictError when the username is already taken. The unique
    index on users.username decides conflicts, so concurrent signups with the
    same name cannot both succeed.
    """
    if not data.username or not data.username.strip() or not data.role or not data.password:
        raise ValidationError("Username, role, and password are required")
    username = _clean_username(data.username)
    role = _parse_role(data.role)
    _check_password(data.password)

    user = User(
        username=username,
        password_hash=hash_password(data.password),
        role=role,
        **{field: getattr(data, field) for field in PROFILE_FIELDS},
    )
    db.add(user)
    _commit_or_conflict(db, username)
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "role": role.value})
    return UserOut.model_validate(user)


def update_user(db: Session, user_id: str, data: UserUpdate) -> UserOut | None:
    """Apply the fields present in data; return the updated user or None if absent."""
    user = db.get(User, user_id)
    if user is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "username" in changes:
        if not changes["username"]:
            raise ValidationError("Username cannot be empty")
        user.username = _clean_username(changes["username"])
    if "role" in changes:
        if not changes["role"]:
            raise ValidationError("Role cannot be empty")
        user.role = _parse_role(changes["role"])
    if "password" in changes:
        if not changes["password"]:
            raise ValidationError("Password cannot be empty")
        _check_password(changes["password"])
        user.password_hash = hash_password(changes["password"])
    for field in PROFILE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])

    _commit_or_conflict(db, user.username)
    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id, "fields": sorted(changes)})
    return UserOut.model_validate(user)


def delete_user(db: Session, user_id: str) -> bool:
    """Delete a user and, by cascade, its reports. Returns False if it did not exist."""
    user = db.get(User, user_id)
    if user is None:
        return False
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
    return True


def ensure_initial_admin(db: Session, settings: "Settings") -> bool:
    """
    Create the bootstrap admin account if no user named ADMIN_USERNAME exists.

    Idempotent. Returns True when an account was created.
    """
    username = settings.ADMIN_USERNAME
    if db.query(User.id).filter(User.username == username).first() is not None:
        logger.info("Admin user already exists", extra={"username": username})
        return False
    if settings.ADMIN_PASSWORD is None:
        logger.warning(
            "ADMIN_PASSWORD is not set; skipping initial admin creation",
            extra={"username": username},
        )
        return False
    create_user(
        db,
        UserCreate(
            username=username,
            role=Role.ADMIN.value,
            password=settings.ADMIN_PASSWORD.get_secret_value(),
        ),
    )
    logger.info("Initial admin user created", extra={"username": username})
    return True
