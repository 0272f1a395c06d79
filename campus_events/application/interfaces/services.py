"""Service interfaces (ports) for external collaborators.

Implementations live in infrastructure (local filesystem or S3 image store).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from campus_events.application.dtos.event import ImageUpload


class IImageStore(Protocol):
    """Protocol for event image storage (DIP). The core never inspects file contents."""

    async def upload(self, owner_id: str, image: ImageUpload) -> str:
        """Store image under owner_id; return its public URL."""

    async def delete(self, url: str) -> None:
        """Release the image at url (no-op if already gone)."""
