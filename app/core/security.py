"""Password hashing and JWT creation/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.models.user import Role

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
# bcrypt only reads the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Raised when a token is mis-signed, malformed, or expired."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token."""

    subject_id: str
    role: Role


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long input never matches."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_access_token(
    sub: str,
    role: Role | str,
    settings: "Settings",
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with sub (user id), role, iat and exp."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": Role(role).value,
        "exp": expire,
        "iat": issued_at,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> TokenClaims:
    """
    Decode and validate a JWT; return the subject id and role.

    Raises InvalidTokenError on a bad signature, an expired token, or a payload
    without a usable sub/role. Every decoding failure is reported as invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise InvalidTokenError("Token could not be decoded") from e

    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        raise InvalidTokenError("Token payload has no subject")
    try:
        role = Role(payload.get("role"))
    except ValueError as e:
        raise InvalidTokenError("Token payload has an unknown role") from e
    return TokenClaims(subject_id=sub, role=role)
