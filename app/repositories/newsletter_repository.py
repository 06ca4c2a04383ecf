"""Newsletter signup data access layer."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.newsletter import NewsletterSignup


async def get_by_email(db: AsyncSession, email: str) -> NewsletterSignup | None:
    q = select(NewsletterSignup).where(NewsletterSignup.email == email)
    return (await db.execute(q)).scalar_one_or_none()


async def list_signups(db: AsyncSession, *, skip: int = 0, limit: int = 50) -> tuple[list[NewsletterSignup], int]:
    total = (await db.execute(select(func.count()).select_from(NewsletterSignup))).scalar() or 0
    q = select(NewsletterSignup).order_by(NewsletterSignup.created_at.desc()).offset(skip).limit(limit)
    return list((await db.execute(q)).scalars().all()), total


async def create(db: AsyncSession, signup: NewsletterSignup) -> NewsletterSignup:
    db.add(signup)
    await db.flush()
    return signup
