"""
Image store module.

Uploads and deletes avatar images in Supabase Storage.

Public API:
- IImageStore: Interface for image storage
- ImageStore: Supabase Storage implementation
- StoredImage: Store ID and public URL of an upload
- Exceptions: ImageUploadError, ImageDeleteError, EmptyImageError
"""

from .interfaces import IImageStore
from .models import StoredImage
from .service import ImageStore, detect_content_type
from .exceptions import ImageUploadError, ImageDeleteError, EmptyImageError

__all__ = [
    "IImageStore",
    "StoredImage",
    "ImageStore",
    "detect_content_type",
    "ImageUploadError",
    "ImageDeleteError",
    "EmptyImageError",
]
