"""Blog post, category and editor schemas."""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator

from app.models.blog import BlogPostStatus
from app.models.taxonomy import BlogCategoryName
from app.schemas.advisor import _dedupe
from app.schemas.common import reject_null
from app.utils.markdown_editor import ACTIONS

CategoryNames = Annotated[list[BlogCategoryName], AfterValidator(_dedupe)]


class BlogPostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    slug: str | None = Field(None, max_length=500, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    content: str = ""
    excerpt: str | None = None
    cover_image_url: str | None = Field(None, max_length=500)
    status: BlogPostStatus = BlogPostStatus.DRAFT
    published_at: datetime | None = None
    categories: CategoryNames = Field(default_factory=list)


class BlogPostUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    slug: str | None = Field(None, max_length=500, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    content: str | None = None
    excerpt: str | None = None
    cover_image_url: str | None = Field(None, max_length=500)
    status: BlogPostStatus | None = None
    published_at: datetime | None = None
    categories: CategoryNames | None = None

    _required = field_validator("title", "content", "status", mode="before")(reject_null)


class BlogPostFilter(BaseModel):
    status: BlogPostStatus | None = None
    category: BlogCategoryName | None = None
    search: str | None = None
    page: int = 1
    per_page: int = 10


class BlogPostSummary(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: str | None = None
    cover_image_url: str | None = None
    status: BlogPostStatus
    published_at: datetime | None = None
    categories: list[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogPostResponse(BlogPostSummary):
    content: str
    author_id: uuid.UUID | None = None


class CategoryCreate(BaseModel):
    name: BlogCategoryName


class CategoryAssign(BaseModel):
    name: BlogCategoryName


class CategoryResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class EditorFormatRequest(BaseModel):
    text: str = ""
    selection_start: int = Field(ge=0)
    selection_end: int = Field(ge=0)
    action: str

    @model_validator(mode="after")
    def _check_selection(self) -> "EditorFormatRequest":
        if self.action not in ACTIONS:
            raise ValueError(f"Unknown action '{self.action}'")
        if self.selection_start > self.selection_end:
            raise ValueError("selection_start must not exceed selection_end")
        if self.selection_end > len(self.text):
            raise ValueError("Selection is outside the text")
        return self


class EditorFormatResponse(BaseModel):
    text: str
    cursor: int
