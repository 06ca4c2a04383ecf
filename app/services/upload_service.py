"""Image uploads to object storage."""
import logging

from fastapi import HTTPException

from app.config import settings
from app.integrations.storage.client import BUCKETS, StorageClient, StorageError
from app.middleware.error_handler import AppException
from app.models.user import User
from app.utils.file_validation import generate_object_name, prepare_image, validate_image

logger = logging.getLogger(__name__)

# bucket -> admin only
BUCKET_ADMIN_ONLY: dict[str, bool] = {
    "advisor-headshots": False,
    "blog-images": True,
    "firm-logos": True,
}


def check_bucket_access(bucket: str, user: User) -> None:
    if bucket not in BUCKETS:
        raise HTTPException(status_code=404, detail=f"Unknown bucket '{bucket}'")
    if BUCKET_ADMIN_ONLY.get(bucket, True) and not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")


async def upload_image(
    storage: StorageClient, bucket: str, file_bytes: bytes, content_type: str, user: User,
) -> dict:
    """Validate, transform and store an image; return its location.

    Raises FileValidationError (400) for rejected files and AppException (502)
    when the storage service fails.
    """
    check_bucket_access(bucket, user)
    mime = validate_image(file_bytes, content_type, settings.MAX_UPLOAD_BYTES)
    data = prepare_image(file_bytes, bucket)
    path = generate_object_name(mime)

    try:
        url = await storage.upload(bucket, path, data, mime)
    except StorageError as exc:
        raise AppException(502, str(exc), "/errors/storage-unavailable") from exc

    logger.info("User %s uploaded %s/%s", user.id, bucket, path)
    return {"bucket": bucket, "path": path, "url": url, "content_type": mime, "size": len(data)}
