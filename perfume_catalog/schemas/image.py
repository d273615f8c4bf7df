"""Pydantic schemas for uploaded image assets."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StoredImage(BaseModel):
    """Metadata about an image that was just written to the upload directory."""

    filename: str = Field(description="Generated file name, used as the deletion handle")
    original_name: str | None = Field(default=None, description="Client-side file name")
    size: int = Field(description="Size in bytes")
    mimetype: str
    url: str = Field(description="Public-relative URL, e.g. /uploads/perfume_<uuid>.jpg")
    full_url: str | None = Field(default=None, description="Absolute URL built from the request host")


class StoredImageInfo(BaseModel):
    """Directory listing entry for an uploaded image."""

    filename: str
    size: int
    created_at: datetime
    modified_at: datetime
    url: str
    full_url: str | None = None


class ImageUploadResponse(BaseModel):
    success: bool = True
    message: str
    data: StoredImage


class ImageBatchUploadResponse(BaseModel):
    success: bool = True
    message: str
    data: list[StoredImage]
    count: int


class ImageListResponse(BaseModel):
    success: bool = True
    data: list[StoredImageInfo]
    count: int
