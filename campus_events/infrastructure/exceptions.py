"""Infrastructure exceptions for image storage.

Image store errors extend CampusEventsError so presentation can map them
to HTTP responses consistently.
"""

from campus_events.domain.exceptions import CampusEventsError


class ImageStoreError(CampusEventsError):
    """Base exception for image storage operations."""


class ImageUploadError(ImageStoreError):
    """Image upload failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload image: {key}",
            "IMAGE_UPLOAD_ERROR",
            {"key": key, "reason": reason},
        )


class ImageDeleteError(ImageStoreError):
    """Image deletion failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete image: {url}",
            "IMAGE_DELETE_ERROR",
            {"url": url, "reason": reason},
        )


class ImagePathError(ImageStoreError):
    """Key or URL resolves outside the store (path traversal or foreign URL)."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Image path is not managed by this store: {value}",
            "IMAGE_PATH_INVALID",
            {"value": value},
        )
