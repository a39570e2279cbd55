"""
Supabase Storage image store.

Uploads raw bytes into a bucket and hands out the bucket's image-render URL,
which serves a compressed web format (WebP for clients that accept it) at
the configured quality. Storage calls go through the synchronous Supabase
client, so they run in a worker thread under a timeout.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Optional

import httpx
from storage3.utils import StorageException
from supabase import Client

from shared.config import Settings

from .interfaces import IImageStore
from .models import StoredImage
from .exceptions import EmptyImageError, ImageDeleteError, ImageUploadError

logger = logging.getLogger(__name__)

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def detect_content_type(data: bytes) -> str:
    """Guess an image MIME type from its leading bytes."""
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, content_type in _SIGNATURES:
        if data.startswith(signature):
            return content_type
    return "application/octet-stream"


class ImageStore(IImageStore):
    """IImageStore backed by a Supabase Storage bucket."""

    def __init__(
        self,
        db: Client,
        bucket: str = "avatars",
        quality: int = 80,
        timeout: float = 30.0,
    ):
        self._db = db
        self._bucket = bucket
        self._quality = quality
        self._timeout = timeout

    @classmethod
    def from_settings(cls, db: Client, settings: Settings) -> "ImageStore":
        return cls(
            db,
            bucket=settings.avatar_bucket,
            quality=settings.avatar_quality,
            timeout=settings.image_store_timeout,
        )

    async def store(
        self,
        data: bytes,
        folder: str = "garden",
        name: Optional[str] = None,
    ) -> StoredImage:
        """Upload an image and return its store ID and public URL."""
        if not data:
            raise EmptyImageError()

        path = f"{folder.strip('/')}/{name or uuid.uuid4().hex}"
        bucket = self._db.storage.from_(self._bucket)
        file_options = {
            "content-type": detect_content_type(data),
            "cache-control": "3600",
            "upsert": "true",
        }

        try:
            await self._call(bucket.upload, path, data, file_options)
        except asyncio.TimeoutError:
            logger.error("Image upload timed out after %ss: %s", self._timeout, path)
            raise ImageUploadError(path, reason="timeout")
        except (StorageException, httpx.HTTPError) as e:
            logger.error("Image upload failed for %s: %s", path, e)
            raise ImageUploadError(path, reason=str(e))

        url = bucket.get_public_url(path, {"transform": {"quality": self._quality}})
        logger.info("Uploaded image %s to bucket %s", path, self._bucket)
        return StoredImage(store_id=path, url=url)

    async def delete(self, store_id: str) -> bool:
        """Remove an image from the bucket."""
        bucket = self._db.storage.from_(self._bucket)
        try:
            await self._call(bucket.remove, [store_id])
        except asyncio.TimeoutError:
            raise ImageDeleteError(store_id, reason="timeout")
        except (StorageException, httpx.HTTPError) as e:
            raise ImageDeleteError(store_id, reason=str(e))

        logger.info("Deleted image %s from bucket %s", store_id, self._bucket)
        return True

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self._timeout)
