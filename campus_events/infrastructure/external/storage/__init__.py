"""Event image storage backends."""

from campus_events.infrastructure.external.storage.factory import ImageStoreFactory
from campus_events.infrastructure.external.storage.protocol import (
    ImageStoreProtocol,
    build_image_key,
)

__all__ = ["ImageStoreFactory", "ImageStoreProtocol", "build_image_key"]
