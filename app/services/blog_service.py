"""Blog CMS: posts, draft visibility and categories."""
import uuid

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit_log import AuditAction, AuditLog
from app.models.blog import BlogCategory, BlogPost, BlogPostCategory, BlogPostStatus
from app.models.user import User
from app.repositories import blog_repository
from app.schemas.blog import BlogPostCreate, BlogPostFilter, BlogPostSummary, BlogPostUpdate
from app.utils import query_cache
from app.utils.helpers import slugify, unique_slug, utc_now

CACHE_NAMESPACE = "blog"


async def list_posts(db: AsyncSession, filters: BlogPostFilter, is_admin: bool) -> dict:
    """Published posts for readers; every post (optionally by status) for admins."""
    async def load() -> dict:
        posts, total = await blog_repository.list_posts(
            db,
            include_drafts=is_admin,
            status=filters.status,
            category=filters.category.value if filters.category else None,
            search=filters.search,
            skip=(filters.page - 1) * filters.per_page,
            limit=filters.per_page,
        )
        return {
            "items": [BlogPostSummary.model_validate(p).model_dump(mode="json") for p in posts],
            "total": total,
        }

    if is_admin:
        return await load()
    return await query_cache.get_or_set(CACHE_NAMESPACE, filters.model_dump(mode="json"), load)


async def get_post(db: AsyncSession, post_id: uuid.UUID) -> BlogPost:
    post = await blog_repository.get_by_id(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


async def get_post_by_slug(db: AsyncSession, slug: str, is_admin: bool) -> BlogPost:
    post = await blog_repository.get_by_slug(db, slug)
    if not post or (post.status != BlogPostStatus.PUBLISHED and not is_admin):
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


async def _ensure_categories(db: AsyncSession, names: list[str]) -> None:
    for name in names:
        if not await blog_repository.get_category(db, name):
            await blog_repository.create_category(db, BlogCategory(name=name, slug=slugify(name)))


async def _set_categories(db: AsyncSession, post: BlogPost, names: list[str]) -> None:
    """Make the post's category set equal to ``names``, keeping existing links."""
    await _ensure_categories(db, names)
    wanted = set(names)
    for link in [link for link in post.category_links if link.category_name not in wanted]:
        post.category_links.remove(link)
    present = set(post.categories)
    for name in names:
        if name not in present:
            post.category_links.append(BlogPostCategory(category_name=name))


async def create_post(db: AsyncSession, data: BlogPostCreate, user: User) -> BlogPost:
    if data.slug:
        if await blog_repository.slug_exists(db, data.slug):
            raise HTTPException(status_code=409, detail="Slug already in use")
        slug = data.slug
    else:
        slug = await unique_slug(data.title, lambda s: blog_repository.slug_exists(db, s), "post")

    post = BlogPost(
        title=data.title,
        slug=slug,
        content=data.content,
        excerpt=data.excerpt,
        cover_image_url=data.cover_image_url,
        status=data.status,
        author_id=user.id,
        published_at=data.published_at,
    )
    if post.status == BlogPostStatus.PUBLISHED and post.published_at is None:
        post.published_at = utc_now()
    post = await blog_repository.create(db, post)

    if data.categories:
        await _set_categories(db, post, [c.value for c in data.categories])
        post = await blog_repository.update(db, post)

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.CREATE,
        entity_type="blog_post",
        entity_id=post.id,
        changes={"title": post.title, "status": post.status.value},
    ))
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return post


async def update_post(db: AsyncSession, post: BlogPost, data: BlogPostUpdate, user: User) -> BlogPost:
    values = data.model_dump(exclude_unset=True, exclude={"categories"})
    new_slug = values.get("slug")
    if new_slug and new_slug != post.slug and await blog_repository.slug_exists(db, new_slug):
        raise HTTPException(status_code=409, detail="Slug already in use")
    if "slug" in values and not new_slug:
        values.pop("slug")

    was_published = post.status == BlogPostStatus.PUBLISHED
    changes = {}
    for key, value in values.items():
        old_value = getattr(post, key)
        setattr(post, key, value)
        changes[key] = {"from": str(old_value), "to": str(value)}
    if post.status == BlogPostStatus.PUBLISHED and post.published_at is None:
        post.published_at = utc_now()

    if data.categories is not None:
        await _set_categories(db, post, [c.value for c in data.categories])
        changes["categories"] = [c.value for c in data.categories]

    post = await blog_repository.update(db, post)

    action = AuditAction.PUBLISH if (not was_published and post.status == BlogPostStatus.PUBLISHED) else AuditAction.UPDATE
    if changes:
        db.add(AuditLog(
            user_id=user.id,
            action=action,
            entity_type="blog_post",
            entity_id=post.id,
            changes=changes,
        ))
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return post


async def delete_post(db: AsyncSession, post: BlogPost, user: User) -> None:
    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.DELETE,
        entity_type="blog_post",
        entity_id=post.id,
        changes={"title": post.title},
    ))
    await blog_repository.delete(db, post)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)


# --- Categories ---

async def list_categories(db: AsyncSession) -> list[BlogCategory]:
    return await blog_repository.list_categories(db)


async def create_category(db: AsyncSession, name: str) -> BlogCategory:
    if await blog_repository.get_category(db, name):
        raise HTTPException(status_code=409, detail="Category already exists")
    return await blog_repository.create_category(db, BlogCategory(name=name, slug=slugify(name)))


async def add_category(db: AsyncSession, post: BlogPost, name: str) -> BlogPost:
    await _ensure_categories(db, [name])
    if name not in post.categories:
        post.category_links.append(BlogPostCategory(category_name=name))
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return await blog_repository.update(db, post)


async def remove_category(db: AsyncSession, post: BlogPost, name: str) -> BlogPost:
    link = next((link for link in post.category_links if link.category_name == name), None)
    if link is None:
        raise HTTPException(status_code=404, detail="Category not assigned to this post")
    post.category_links.remove(link)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return await blog_repository.update(db, post)


async def remove_all_categories(db: AsyncSession, post: BlogPost) -> BlogPost:
    post.category_links.clear()
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return await blog_repository.update(db, post)
