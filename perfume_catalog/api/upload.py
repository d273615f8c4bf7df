"""Image upload endpoints backing the perfume ``image_url`` field."""
from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from perfume_catalog.core.config import get_settings
from perfume_catalog.schemas.image import (
    ImageBatchUploadResponse,
    ImageListResponse,
    ImageUploadResponse,
    StoredImage,
)
from perfume_catalog.schemas.perfume import MessageResponse
from perfume_catalog.services.errors import CatalogError, MissingImage, TooManyImages
from perfume_catalog.services.image_store import ImageStore

settings = get_settings()

router = APIRouter(prefix="/upload", tags=["upload"])


@lru_cache
def get_image_store() -> ImageStore:
    """Dependency returning the process-wide ImageStore."""
    return ImageStore(
        settings.upload_dir,
        url_prefix=settings.uploads_url_prefix,
        max_size_bytes=settings.max_image_size_bytes,
    )


def _absolute(request: Request, image: StoredImage) -> StoredImage:
    return image.model_copy(update={"full_url": f"{str(request.base_url).rstrip('/')}{image.url}"})


@router.post(
    "/image",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload a perfume image",
    description=(
        "Accepts a single JPEG, PNG or WebP file in the `image` form field (max 5MB by default) and "
        "returns the URL to store in the perfume's `image_url`."
    ),
)
async def upload_image(
    request: Request,
    image: UploadFile | None = File(default=None, description="Image file"),
    store: ImageStore = Depends(get_image_store),
) -> ImageUploadResponse:
    """
    Store a single image.

    Raises:
        MissingImage: 400 if no file was sent
        UnsupportedImageType: 400 if the MIME type is not allowed
        ImageTooLarge: 400 if the file exceeds the size ceiling
    """
    if image is None or not image.filename:
        raise MissingImage("Please choose an image to upload")

    try:
        stored = store.save(image.filename, image.content_type, image.file)
    finally:
        await image.close()

    return ImageUploadResponse(message="Image uploaded successfully", data=_absolute(request, stored))


@router.post(
    "/multiple",
    response_model=ImageBatchUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload several perfume images",
)
async def upload_images(
    request: Request,
    images: list[UploadFile] | None = File(default=None, description="Image files"),
    store: ImageStore = Depends(get_image_store),
) -> ImageBatchUploadResponse:
    """
    Store up to ``max_images_per_request`` images at once.

    The batch is all-or-nothing: if any file is rejected, files already written
    by this request are removed again.
    """
    if not images:
        raise MissingImage("Please choose images to upload")

    try:
        if len(images) > settings.max_images_per_request:
            raise TooManyImages(f"Maximum number of files is {settings.max_images_per_request}")

        stored: list[StoredImage] = []
        try:
            for image in images:
                stored.append(store.save(image.filename, image.content_type, image.file))
        except CatalogError:
            for saved in stored:
                store.delete(saved.filename)
            raise
    finally:
        for image in images:
            await image.close()

    return ImageBatchUploadResponse(
        message=f"{len(stored)} image(s) uploaded successfully",
        data=[_absolute(request, image) for image in stored],
        count=len(stored),
    )


@router.get(
    "/list",
    response_model=ImageListResponse,
    status_code=status.HTTP_200_OK,
    summary="List uploaded images",
)
async def list_images(
    request: Request,
    store: ImageStore = Depends(get_image_store),
) -> ImageListResponse:
    base_url = str(request.base_url).rstrip("/")
    images = [
        image.model_copy(update={"full_url": f"{base_url}{image.url}"})
        for image in store.list_images()
    ]
    return ImageListResponse(data=images, count=len(images))


@router.delete(
    "/{filename}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete an uploaded image",
)
async def delete_image(
    filename: str,
    store: ImageStore = Depends(get_image_store),
) -> MessageResponse:
    """
    Delete an image by its stored file name.

    Raises:
        InvalidImageName: 400 if the name contains path components
        ImageNotFound: 404 if no such file exists
    """
    store.delete(filename)
    return MessageResponse(message="Image deleted successfully")
