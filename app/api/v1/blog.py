"""Blog API - posts, categories and the markdown editor helper."""
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, get_optional_user, require_admin
from app.models.blog import BlogPostStatus
from app.models.taxonomy import BlogCategoryName
from app.models.user import User
from app.schemas.blog import (
    BlogPostCreate,
    BlogPostFilter,
    BlogPostResponse,
    BlogPostUpdate,
    CategoryAssign,
    CategoryCreate,
    CategoryResponse,
    EditorFormatRequest,
    EditorFormatResponse,
)
from app.schemas.common import APIResponse, PaginationMeta
from app.services import blog_service
from app.utils.markdown_editor import apply_action

router = APIRouter()


def _post_data(post) -> dict:
    return BlogPostResponse.model_validate(post).model_dump()


# GET /blog/posts - published only unless the caller is an admin
@router.get("/posts", response_model=APIResponse)
async def list_posts(
    status_filter: BlogPostStatus | None = Query(None, alias="status"),
    category: BlogCategoryName | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    current_user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    is_admin = bool(current_user and current_user.is_admin)
    filters = BlogPostFilter(
        status=status_filter if is_admin else None,
        category=category, search=search or None, page=page, per_page=per_page,
    )
    result = await blog_service.list_posts(db, filters, is_admin)
    return APIResponse(
        status="success",
        data=result["items"],
        pagination=PaginationMeta.build(result["total"], page, per_page),
    )


# GET /blog/posts/{slug}
@router.get("/posts/{slug}", response_model=APIResponse)
async def get_post(
    slug: str,
    current_user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post_by_slug(db, slug, bool(current_user and current_user.is_admin))
    return APIResponse(status="success", data=_post_data(post))


# POST /blog/posts - admin
@router.post("/posts", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: BlogPostCreate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.create_post(db, body, admin)
    return APIResponse(status="success", data=_post_data(post))


# PUT /blog/posts/{id} - admin
@router.put("/posts/{post_id}", response_model=APIResponse)
async def update_post(
    post_id: uuid.UUID,
    body: BlogPostUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    post = await blog_service.update_post(db, post, body, admin)
    return APIResponse(status="success", data=_post_data(post))


# DELETE /blog/posts/{id} - admin
@router.delete("/posts/{post_id}", response_model=APIResponse)
async def delete_post(
    post_id: uuid.UUID,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    await blog_service.delete_post(db, post, admin)
    return APIResponse(status="success", message="Blog post deleted")


# GET /blog/categories
@router.get("/categories", response_model=APIResponse)
async def list_categories(db: AsyncSession = Depends(get_db)):
    categories = await blog_service.list_categories(db)
    return APIResponse(
        status="success",
        data=[CategoryResponse.model_validate(c).model_dump() for c in categories],
    )


# POST /blog/categories - admin
@router.post("/categories", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    category = await blog_service.create_category(db, body.name.value)
    return APIResponse(status="success", data=CategoryResponse.model_validate(category).model_dump())


# GET /blog/posts/{id}/categories - admin
@router.get("/posts/{post_id}/categories", response_model=APIResponse)
async def list_post_categories(
    post_id: uuid.UUID,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    return APIResponse(status="success", data=post.categories)


# POST /blog/posts/{id}/categories - admin
@router.post("/posts/{post_id}/categories", response_model=APIResponse)
async def add_post_category(
    post_id: uuid.UUID,
    body: CategoryAssign,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    post = await blog_service.add_category(db, post, body.name.value)
    return APIResponse(status="success", data=post.categories)


# DELETE /blog/posts/{id}/categories/{name} - admin
@router.delete("/posts/{post_id}/categories/{name}", response_model=APIResponse)
async def remove_post_category(
    post_id: uuid.UUID,
    name: str,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    post = await blog_service.remove_category(db, post, name)
    return APIResponse(status="success", data=post.categories)


# DELETE /blog/posts/{id}/categories - admin
@router.delete("/posts/{post_id}/categories", response_model=APIResponse)
async def remove_all_post_categories(
    post_id: uuid.UUID,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    post = await blog_service.get_post(db, post_id)
    post = await blog_service.remove_all_categories(db, post)
    return APIResponse(status="success", data=post.categories)


# POST /blog/editor/format - admin, toolbar action on a textarea selection
@router.post("/editor/format", response_model=APIResponse)
async def format_text(body: EditorFormatRequest, _admin: User = require_admin()):
    result = apply_action(body.text, body.selection_start, body.selection_end, body.action)
    return APIResponse(
        status="success",
        data=EditorFormatResponse(text=result.text, cursor=result.cursor).model_dump(),
    )
