"""Image store factory: creates local or S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campus_events.infrastructure.external.storage.protocol import ImageStoreProtocol

if TYPE_CHECKING:
    from campus_events.core.config import Settings


class ImageStoreFactory:
    """Factory for image store instances based on configuration."""

    @staticmethod
    def create_image_store(settings: "Settings | None" = None) -> ImageStoreProtocol:
        """Create image store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalImageStore or S3ImageStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from campus_events.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from campus_events.infrastructure.external.storage.local_image_store import (
                LocalImageStore,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalImageStore(storage_root=s.storage_root, base_url=s.storage_base_url)
        if backend == "s3":
            if not s.s3_bucket:
                raise ValueError("S3_BUCKET required for s3 backend")
            try:
                from campus_events.infrastructure.external.storage.s3_image_store import (
                    S3ImageStore,
                )
            except ImportError as e:
                raise ValueError(
                    "S3 backend requires boto3. Install with: pip install 'campus-events[storage]'"
                ) from e
            return S3ImageStore(
                bucket=s.s3_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
                public_base_url=s.storage_base_url,
            )
        raise ValueError(f"Unknown storage backend: {backend}. Supported: 'local', 's3'")
