"""Media storage for uploaded videos, thumbnails and avatars.

Files live on local disk under ``UPLOAD_DIR`` and are served from
``MEDIA_BASE_URL/uploads/``. Layout: ``users/{user_id}/{kind}/{uuid}{ext}``.
"""
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from wolfpack.core.config import settings
from wolfpack.core.errors import ValidationError

logger = logging.getLogger(__name__)

IMAGE_TYPES = {"image/jpeg": ".jpg", "image/png": ".png", "image/webp": ".webp"}
VIDEO_TYPES = {"video/mp4": ".mp4", "video/quicktime": ".mov", "video/webm": ".webm"}


@dataclass(frozen=True)
class MediaKind:
    folder: str
    content_types: dict[str, str]
    max_size_mb: int


VIDEO = MediaKind("videos", VIDEO_TYPES, 100)
THUMBNAIL = MediaKind("thumbnails", IMAGE_TYPES, 2)
AVATAR = MediaKind("avatars", IMAGE_TYPES, 5)


def extension_for(kind: MediaKind, content_type: str | None) -> str:
    ext = kind.content_types.get(content_type or "")
    if ext is None:
        allowed = ", ".join(sorted(kind.content_types))
        raise ValidationError(f"Invalid file type: {content_type}. Allowed: {allowed}")
    return ext


def check_size(kind: MediaKind, data: bytes) -> None:
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > kind.max_size_mb * 1024 * 1024:
        raise ValidationError(f"File too large. Max {kind.max_size_mb}MB")


class LocalStorage:
    def __init__(self, base_dir: str | None = None, base_url: str | None = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR).resolve()
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")

    def _folder(self, user_id: str, kind: MediaKind) -> Path:
        path = self.base_dir / "users" / str(user_id) / kind.folder
        path.mkdir(parents=True, exist_ok=True)
        return path

    def save(self, user_id: str, kind: MediaKind, data: bytes, content_type: str | None) -> str:
        """Validate and write ``data``; returns the public URL."""
        ext = extension_for(kind, content_type)
        check_size(kind, data)
        filename = f"{uuid.uuid4().hex}{ext}"
        (self._folder(user_id, kind) / filename).write_bytes(data)
        return f"{self.base_url}/uploads/users/{user_id}/{kind.folder}/{filename}"

    def delete(self, url: str) -> bool:
        if "/uploads/" not in url:
            return False
        filepath = (self.base_dir / url.split("/uploads/", 1)[1]).resolve()
        if self.base_dir not in filepath.parents:
            return False
        try:
            filepath.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not delete %s: %s", filepath, e)
            return False
        return True


_storage: LocalStorage | None = None


def get_storage() -> LocalStorage:
    global _storage
    if _storage is None:
        _storage = LocalStorage()
    return _storage
