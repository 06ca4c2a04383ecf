"""Blog post and category data access layer."""
import uuid as _uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.blog import BlogCategory, BlogPost, BlogPostCategory, BlogPostStatus


async def get_by_id(db: AsyncSession, post_id: _uuid.UUID) -> BlogPost | None:
    return (await db.execute(select(BlogPost).where(BlogPost.id == post_id))).scalar_one_or_none()


async def get_by_slug(db: AsyncSession, slug: str) -> BlogPost | None:
    return (await db.execute(select(BlogPost).where(BlogPost.slug == slug))).scalar_one_or_none()


async def slug_exists(db: AsyncSession, slug: str) -> bool:
    q = select(func.count()).select_from(BlogPost).where(BlogPost.slug == slug)
    return ((await db.execute(q)).scalar() or 0) > 0


async def list_posts(
    db: AsyncSession,
    *,
    include_drafts: bool = False,
    status: BlogPostStatus | None = None,
    category: str | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[BlogPost], int]:
    conditions = []
    if not include_drafts:
        conditions.append(BlogPost.status == BlogPostStatus.PUBLISHED)
    elif status:
        conditions.append(BlogPost.status == status)
    if category:
        conditions.append(BlogPost.id.in_(
            select(BlogPostCategory.post_id).where(BlogPostCategory.category_name == category)
        ))
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(BlogPost.title.ilike(pattern), BlogPost.excerpt.ilike(pattern)))

    q = select(BlogPost).where(*conditions)
    count_q = select(func.count()).select_from(BlogPost).where(*conditions)

    if include_drafts:
        order = (BlogPost.updated_at.desc(), BlogPost.created_at.desc())
    else:
        order = (BlogPost.published_at.desc(), BlogPost.created_at.desc())

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.order_by(*order).offset(skip).limit(limit))).scalars().all()
    return list(rows), total


async def list_published(db: AsyncSession) -> list[BlogPost]:
    q = select(BlogPost).where(BlogPost.status == BlogPostStatus.PUBLISHED).order_by(BlogPost.published_at.desc())
    return list((await db.execute(q)).scalars().all())


async def create(db: AsyncSession, post: BlogPost) -> BlogPost:
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def update(db: AsyncSession, post: BlogPost) -> BlogPost:
    await db.flush()
    await db.refresh(post)
    return post


async def delete(db: AsyncSession, post: BlogPost) -> None:
    await db.delete(post)
    await db.flush()


# --- Categories ---

async def list_categories(db: AsyncSession) -> list[BlogCategory]:
    return list((await db.execute(select(BlogCategory).order_by(BlogCategory.name))).scalars().all())


async def get_category(db: AsyncSession, name: str) -> BlogCategory | None:
    return (await db.execute(select(BlogCategory).where(BlogCategory.name == name))).scalar_one_or_none()


async def create_category(db: AsyncSession, category: BlogCategory) -> BlogCategory:
    db.add(category)
    await db.flush()
    return category
