"""Upload schemas."""
from pydantic import BaseModel


class UploadResponse(BaseModel):
    bucket: str
    path: str
    url: str
    content_type: str
    size: int
