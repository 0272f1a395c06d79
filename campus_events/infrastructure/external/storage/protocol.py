"""Image store protocol (DIP) and object key layout. Implementations: LocalImageStore, S3ImageStore."""

import mimetypes
import os
import re
from datetime import datetime
from typing import Protocol

from campus_events.application.dtos.event import ImageUpload
from campus_events.infrastructure.exceptions import ImagePathError
from campus_events.shared.utils.datetime import utc_now

_OWNER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")
_EXT_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


class ImageStoreProtocol(Protocol):
    """Protocol for event image backends (local filesystem, S3-compatible)."""

    async def upload(self, owner_id: str, image: ImageUpload) -> str:
        """Store image under owner_id; return its public URL."""
        ...

    async def delete(self, url: str) -> None:
        """Delete the image at url. No-op if already gone."""
        ...


def image_extension(image: ImageUpload) -> str:
    """Lower-case extension from the filename, else guessed from the content type."""
    ext = os.path.splitext(os.path.basename(image.filename or ""))[1].lower()
    if not _EXT_RE.match(ext):
        ext = mimetypes.guess_extension(image.content_type or "") or ""
    return ext if _EXT_RE.match(ext) else ""


def build_image_key(owner_id: str, image: ImageUpload, now: datetime | None = None) -> str:
    """Return the object key '{owner_id}/{epoch_millis}{ext}'.

    Raises:
        ImagePathError: owner_id contains characters outside [A-Za-z0-9_-].
    """
    if not _OWNER_ID_RE.match(owner_id or ""):
        raise ImagePathError(owner_id)
    stamp = int((now or utc_now()).timestamp() * 1000)
    return f"{owner_id}/{stamp}{image_extension(image)}"


def key_from_url(url: str, base_url: str) -> str:
    """Strip base_url from url and return the object key.

    Raises:
        ImagePathError: url does not start with base_url.
    """
    prefix = base_url.rstrip("/") + "/"
    if not url.startswith(prefix) or len(url) == len(prefix):
        raise ImagePathError(url)
    return url[len(prefix):]
