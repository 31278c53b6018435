"""Media store used for video files, thumbnails, avatars and cover images.

Multipart uploads are spooled to a temporary file, handed to the configured
storage backend, and the temporary file is always removed afterwards.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from vidshare.lib.exceptions import UploadError, ValidationError
from vidshare.lib.storage.manager import StorageManager

logger = logging.getLogger(__name__)

VIDEO_TYPES = ("video/",)
IMAGE_TYPES = ("image/",)


class Upload(Protocol):
    """The parts of Litestar's ``UploadFile`` the media store relies on."""

    filename: str
    content_type: str

    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class UploadResult:
    url: str
    secure_url: str
    duration: float | None = None


class MediaStore:
    """Uploads local files to a named storage backend."""

    def __init__(self, storage: StorageManager, store: str | None = None, max_upload_size: int | None = None) -> None:
        self._storage = storage
        self._store = store or storage.default_store
        self.max_upload_size = max_upload_size

    async def upload(self, local_path: Path, content_type: str, duration: float | None = None) -> UploadResult:
        """Upload ``local_path`` and return where it can be fetched from.

        Raises:
            UploadError: The file could not be read or the backend failed.
        """
        try:
            data = await asyncio.to_thread(local_path.read_bytes)
            key = f"{hashlib.sha256(data).hexdigest()}{local_path.suffix.lower()}"
            stored = await self._storage.get(self._store).put(key, data, content_type)
        except Exception as exc:
            logger.exception("Upload of %s to store %r failed", local_path.name, self._store)
            raise UploadError("Failed to upload file to media store") from exc

        logger.info("Stored %s (%d bytes) in %r", stored.key, stored.size, self._store)
        return UploadResult(
            url=stored.url,
            secure_url=stored.url.replace("http://", "https://", 1),
            duration=duration,
        )


def _spool(data: bytes, suffix: str) -> Path:
    fd, name = tempfile.mkstemp(prefix="vidshare-", suffix=suffix)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    return Path(name)


async def save_upload(
    media: MediaStore,
    upload: Upload | None,
    field: str,
    accept: tuple[str, ...] = (),
    duration: float | None = None,
) -> UploadResult:
    """Validate a multipart file and push it through the media store.

    Raises:
        ValidationError: The file is missing, of the wrong type, or too large.
        UploadError: The media store failed.
    """
    if upload is None or not getattr(upload, "filename", None):
        raise ValidationError(f"{field} is required")

    content_type = upload.content_type or "application/octet-stream"
    if accept and not content_type.startswith(accept):
        raise ValidationError(f"{field} has unsupported content type {content_type}")

    data = await upload.read()
    if not data:
        raise ValidationError(f"{field} is empty")
    if media.max_upload_size is not None and len(data) > media.max_upload_size:
        raise ValidationError(f"{field} exceeds the maximum upload size")

    path = await asyncio.to_thread(_spool, data, Path(upload.filename).suffix)
    try:
        return await media.upload(path, content_type, duration=duration)
    finally:
        await asyncio.to_thread(path.unlink, missing_ok=True)
