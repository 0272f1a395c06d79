"""S3-compatible image store (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from campus_events.application.dtos.event import ImageUpload
from campus_events.infrastructure.exceptions import ImageDeleteError, ImageUploadError
from campus_events.infrastructure.external.storage.protocol import (
    build_image_key,
    key_from_url,
)


class S3ImageStore:
    """S3-compatible image store.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. Objects are public-read by URL;
    bucket policy controls actual access.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: URL prefix for objects; derived from bucket and endpoint if not set.
        """
        self.bucket = bucket
        self.region = region
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )
        if public_base_url:
            self.base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    async def upload(self, owner_id: str, image: ImageUpload) -> str:
        key = build_image_key(owner_id, image)

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=image.data,
                ContentType=image.content_type,
                CacheControl="max-age=3600",
            )

        try:
            await asyncio.to_thread(_put)
        except (BotoCoreError, ClientError) as e:
            raise ImageUploadError(key, str(e)) from e
        return f"{self.base_url}/{key}"

    async def delete(self, url: str) -> None:
        """Delete object. S3 delete is idempotent for missing keys."""
        key = key_from_url(url, self.base_url)
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise ImageDeleteError(url, str(e)) from e
