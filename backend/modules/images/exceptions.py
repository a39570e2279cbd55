"""
Image store module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ValidationError

SERVICE_NAME = "image_store"


class ImageUploadError(ExternalServiceError):
    """Raised when an image cannot be uploaded (including timeouts)."""

    def __init__(self, path: str, reason: Optional[str] = None):
        super().__init__(
            "Image upload failed",
            service=SERVICE_NAME,
            code="IMAGE_UPLOAD_FAILED",
            details={"path": path, "reason": reason},
        )


class ImageDeleteError(ExternalServiceError):
    """Raised when a stored image cannot be deleted."""

    def __init__(self, store_id: str, reason: Optional[str] = None):
        super().__init__(
            "Image delete failed",
            service=SERVICE_NAME,
            code="IMAGE_DELETE_FAILED",
            details={"store_id": store_id, "reason": reason},
        )


class EmptyImageError(ValidationError):
    """Raised when an upload has no content."""

    def __init__(self):
        super().__init__("Image file is empty", code="EMPTY_IMAGE")
