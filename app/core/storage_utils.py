# app/core/storage_utils.py
import logging
import time
import uuid
from typing import Any

from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.supabase_client import storage_client

settings = get_settings()

logger = logging.getLogger(__name__)


def _bucket(name: str):
    return storage_client().storage.from_(name)


def upload_to_storage(
    bucket: str,
    path: str,
    file_bytes: bytes,
    content_type: str | None = None,
) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    Objects are never overwritten: callers generate unique names.

    Args:
        bucket: bucket name, e.g. "products" or "banner".
        path: object path inside the bucket.
              Example: "front-1718000000000-k3j9x1.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Returns:
        Public URL to the uploaded file.

    Raises:
        HTTPException(502): if the storage upload fails.
    """
    options = {"cache-control": "3600", "upsert": "false"}
    if content_type:
        options["content-type"] = content_type

    try:
        _bucket(bucket).upload(path, file_bytes, options)
    except Exception as exc:
        logger.error("Error uploading %s to bucket %s: %s", path, bucket, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to upload image",
        ) from exc

    return _bucket(bucket).get_public_url(path)


def delete_from_storage(bucket: str, path: str) -> None:
    """
    Delete a file from Supabase Storage by its object path.

    The Supabase client expects a list of paths.
    """
    _bucket(bucket).remove([path])


def list_bucket(bucket: str, limit: int = 100, offset: int = 0) -> list[dict[str, Any]]:
    """
    List objects at the root of a bucket.

    Raises:
        HTTPException(502): if the storage listing fails.
    """
    try:
        return _bucket(bucket).list("", {"limit": limit, "offset": offset})
    except Exception as exc:
        logger.error("Error listing bucket %s: %s", bucket, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to list storage objects",
        ) from exc


def filename_from_public_url(url: str) -> str:
    """
    Return the last path segment of a public URL.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/banner/banner-1-a.jpg
        -> 'banner-1-a.jpg'
    """
    return url.rstrip("/").split("/")[-1] if url else ""


def validate_image(content_type: str | None, file_bytes: bytes) -> None:
    """
    Accept any image/* upload up to MAX_IMAGE_BYTES.

    Raises:
        HTTPException(400): missing or non-image content type.
        HTTPException(413): file too large.
    """
    if not content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please select a valid image file",
        )

    if len(file_bytes) > settings.MAX_IMAGE_BYTES:
        mb = settings.MAX_IMAGE_BYTES // (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image size should be less than {mb}MB",
        )


def file_extension(filename: str | None, content_type: str) -> str:
    """
    Extension of the uploaded file name, falling back to the MIME subtype.
    """
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1]
    return content_type.split("/", 1)[-1]


def generate_filename(prefix: str, ext: str) -> str:
    """
    Generate a unique object name.

    Args:
        prefix: leading part, e.g. "front-" or "back-".
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "front-1718000000000-k3j9x1.png"
    """
    millis = int(time.time() * 1000)
    return f"{prefix}{millis}-{uuid.uuid4().hex[:6]}.{ext}"


def timestamped_name(prefix: str, filename: str) -> str:
    """
    Keep the original file name behind a millisecond timestamp,
    e.g. "banner-1718000000000-summer.jpg".
    """
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{filename}"
