"""Photo storage: write uploaded report photos to UPLOAD_DIR and map them to public paths."""

import logging
import re
import time
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

from app.services.errors import ValidationError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_PHOTO_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"})
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
COPY_CHUNK_BYTES = 1024 * 1024


class UploadedPhoto(Protocol):
    """The subset of fastapi.UploadFile used here."""

    filename: str | None
    file: BinaryIO


def _safe_name(filename: str) -> str:
    """Strip directories and characters that do not belong in a file name."""
    base = Path(filename.replace("\\", "/")).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "photo"


def stored_photo_name(filename: str, now_ms: int | None = None) -> str:
    """Collision-resistant name: '<epoch millis>-<original name>'."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{_safe_name(filename)}"


def save_photo(upload: UploadedPhoto, settings: "Settings") -> str:
    """
    Store an uploaded photo and return its stored file name.

    Raises ValidationError for disallowed extensions or files larger than
    MAX_PHOTO_BYTES; a partially written file is removed in that case.
    """
    filename = upload.filename or ""
    if Path(filename).suffix.lower() not in ALLOWED_PHOTO_EXTENSIONS:
        allowed = ", ".join(sorted(ALLOWED_PHOTO_EXTENSIONS))
        raise ValidationError(f"Photo must be an image file ({allowed}).")

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    name = stored_photo_name(filename)
    target = upload_dir / name

    written = 0
    with target.open("wb") as out:
        while chunk := upload.file.read(COPY_CHUNK_BYTES):
            written += len(chunk)
            if written > settings.MAX_PHOTO_BYTES:
                break
            out.write(chunk)
    if written > settings.MAX_PHOTO_BYTES:
        target.unlink(missing_ok=True)
        raise ValidationError(
            f"Photo size must not exceed {settings.MAX_PHOTO_BYTES // (1024 * 1024)} MB."
        )
    logger.info("Photo stored", extra={"photo": name, "bytes": written})
    return name


def delete_photo(name: str | None, settings: "Settings") -> None:
    """Remove a stored photo if it exists."""
    if not name:
        return
    (Path(settings.UPLOAD_DIR) / _safe_name(name)).unlink(missing_ok=True)


def public_photo_path(name: str | None, settings: "Settings") -> str | None:
    """Servable path for a stored photo, or None when there is no photo."""
    if not name:
        return None
    return f"{settings.UPLOAD_URL_PREFIX}/{name}"
