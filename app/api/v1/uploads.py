"""Uploads API - images into object storage buckets."""
from fastapi import APIRouter, Depends, File, UploadFile, status

from app.dependencies import get_current_user, get_storage_client
from app.integrations.storage.client import StorageClient
from app.models.user import User
from app.schemas.common import APIResponse
from app.schemas.upload import UploadResponse
from app.services import upload_service

router = APIRouter()


# POST /uploads/{bucket}
@router.post("/{bucket}", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    bucket: str,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    storage: StorageClient = Depends(get_storage_client),
):
    upload_service.check_bucket_access(bucket, current_user)
    file_bytes = await file.read()
    result = await upload_service.upload_image(
        storage, bucket, file_bytes, file.content_type or "application/octet-stream", current_user,
    )
    return APIResponse(status="success", data=UploadResponse(**result).model_dump())
