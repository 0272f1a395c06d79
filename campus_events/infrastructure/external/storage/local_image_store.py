"""Local filesystem image store with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from campus_events.application.dtos.event import ImageUpload
from campus_events.infrastructure.exceptions import (
    ImageDeleteError,
    ImagePathError,
    ImageUploadError,
)
from campus_events.infrastructure.external.storage.protocol import (
    build_image_key,
    key_from_url,
)

DEFAULT_PUBLIC_PATH = "/media/event-images"


class LocalImageStore:
    """Local filesystem image store with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    URLs are base_url + key; the app serves storage_root at DEFAULT_PUBLIC_PATH
    when no external base_url is configured.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all images.
            base_url: Public URL prefix for stored images.
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = (base_url or DEFAULT_PUBLIC_PATH).rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, key: str) -> Path:
        """Resolve and validate path under storage_root. Raises ImagePathError if traversal."""
        full_path = (self.storage_root / key).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise ImagePathError(key) from e
        return full_path

    async def upload(self, owner_id: str, image: ImageUpload) -> str:
        """Write image atomically and return its URL."""
        key = build_image_key(owner_id, image)
        target_path = self._get_full_path(key)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(image.data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise ImageUploadError(key, str(e)) from e
        return f"{self.base_url}/{key}"

    async def delete(self, url: str) -> None:
        """Delete the file behind url and prune the owner directory when empty."""
        file_path = self._get_full_path(key_from_url(url, self.base_url))
        try:
            if not file_path.exists():
                return
            await aiofiles.os.remove(file_path)
            parent = file_path.parent
            if parent != self.storage_root and not any(parent.iterdir()):
                parent.rmdir()
        except OSError as e:
            raise ImageDeleteError(url, str(e)) from e
