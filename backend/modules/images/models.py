"""
Image store data models.
"""

from pydantic import BaseModel, Field


class StoredImage(BaseModel):
    """Location of an uploaded image."""

    store_id: str = Field(..., description="Object path inside the bucket")
    url: str = Field(..., description="Public URL serving the optimized image")

    model_config = {"frozen": True}
