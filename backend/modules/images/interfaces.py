"""
Image store module interface.

The users module depends on IImageStore so avatar handling can be tested
without a storage backend.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import StoredImage


@runtime_checkable
class IImageStore(Protocol):
    """Interface for an opaque image store keyed by object path."""

    async def store(
        self,
        data: bytes,
        folder: str = "garden",
        name: Optional[str] = None,
    ) -> StoredImage:
        """
        Upload raw image bytes.

        Args:
            data: Image file content
            folder: Folder (path prefix) inside the store
            name: Object name; a random one is generated when omitted

        Returns:
            StoredImage with the store ID and public URL

        Raises:
            ImageUploadError: If the upload fails or times out
        """
        ...

    async def delete(self, store_id: str) -> bool:
        """
        Delete a stored image.

        Raises:
            ImageDeleteError: If the store rejects the delete
        """
        ...
