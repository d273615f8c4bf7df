"""Local-disk storage for perfume images."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from perfume_catalog.schemas.image import StoredImage, StoredImageInfo
from perfume_catalog.services.errors import (
    ImageNotFound,
    ImageTooLarge,
    InvalidImageName,
    UnsupportedImageType,
)

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}
CHUNK_SIZE = 64 * 1024


class ImageStore:
    """Writes uploaded images to a directory and hands back public-relative URLs.

    The catalog only ever sees the URL; filenames act as opaque handles for
    deletion.
    """

    def __init__(self, directory: str | Path, *, url_prefix: str = "/uploads", max_size_bytes: int) -> None:
        self._directory = Path(directory)
        self._url_prefix = url_prefix.rstrip("/")
        self._max_size_bytes = max_size_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def url_for(self, filename: str) -> str:
        return f"{self._url_prefix}/{filename}"

    def save(self, original_name: str | None, content_type: str | None, stream: BinaryIO) -> StoredImage:
        """
        Persist one uploaded image under a generated name.

        Args:
            original_name: File name sent by the client
            content_type: MIME type sent by the client
            stream: Readable binary stream with the image bytes

        Returns:
            StoredImage describing the written file

        Raises:
            UnsupportedImageType: MIME type is not jpeg/png/webp
            ImageTooLarge: Payload exceeds the configured ceiling
        """
        mimetype = (content_type or "").lower()
        if mimetype not in ALLOWED_MIME_TYPES:
            raise UnsupportedImageType(
                f"File type '{content_type}' is not allowed. Only JPEG, PNG and WebP are accepted"
            )

        extension = Path(original_name or "").suffix.lower()
        if extension not in IMAGE_EXTENSIONS:
            extension = ALLOWED_MIME_TYPES[mimetype]
        filename = f"perfume_{uuid4()}{extension}"
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / filename

        size = 0
        with open(target, "wb") as buffer:
            while chunk := stream.read(CHUNK_SIZE):
                size += len(chunk)
                if size > self._max_size_bytes:
                    break
                buffer.write(chunk)

        if size > self._max_size_bytes:
            target.unlink(missing_ok=True)
            max_mb = self._max_size_bytes / (1024 * 1024)
            raise ImageTooLarge(f"Maximum file size is {max_mb:g}MB")

        logger.info(f"Stored image {filename} ({size} bytes, {mimetype})")
        return StoredImage(
            filename=filename,
            original_name=original_name,
            size=size,
            mimetype=mimetype,
            url=self.url_for(filename),
        )

    def _resolve(self, filename: str) -> Path:
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise InvalidImageName(f"'{filename}' is not a valid file name")
        return self._directory / filename

    def delete(self, filename: str) -> None:
        """Remove a stored image by its generated file name."""
        path = self._resolve(filename)
        if not path.is_file():
            raise ImageNotFound(f"File '{filename}' does not exist")
        path.unlink()
        logger.info(f"Deleted image {filename}")

    def list_images(self) -> list[StoredImageInfo]:
        """List image files currently in the upload directory."""
        if not self._directory.exists():
            return []

        images: list[StoredImageInfo] = []
        for path in sorted(self._directory.iterdir()):
            if not path.is_file() or path.suffix.lower() not in IMAGE_EXTENSIONS:
                continue
            stats = path.stat()
            images.append(
                StoredImageInfo(
                    filename=path.name,
                    size=stats.st_size,
                    created_at=datetime.fromtimestamp(stats.st_ctime, tz=timezone.utc),
                    modified_at=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                    url=self.url_for(path.name),
                )
            )
        return images
