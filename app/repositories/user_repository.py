"""User and profile data access layer."""
import uuid as _uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import Profile, User


async def get_by_id(db: AsyncSession, user_id: _uuid.UUID) -> User | None:
    return (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    return (await db.execute(select(User).where(User.email == email.lower()))).scalar_one_or_none()


async def get_profile(db: AsyncSession, user_id: _uuid.UUID) -> Profile | None:
    return (await db.execute(select(Profile).where(Profile.id == user_id))).scalar_one_or_none()


async def list_profiles(
    db: AsyncSession,
    *,
    search: str | None = None,
    is_admin: bool | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Profile], int]:
    q = select(Profile).join(User, User.id == Profile.id)
    count_q = select(func.count()).select_from(Profile).join(User, User.id == Profile.id)

    if is_admin is not None:
        q = q.where(Profile.is_admin == is_admin)
        count_q = count_q.where(Profile.is_admin == is_admin)
    if search:
        pattern = f"%{search}%"
        cond = or_(
            Profile.first_name.ilike(pattern),
            Profile.last_name.ilike(pattern),
            User.email.ilike(pattern),
        )
        q = q.where(cond)
        count_q = count_q.where(cond)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.offset(skip).limit(limit).order_by(Profile.created_at.desc()))).scalars().all()
    return list(rows), total


async def create(db: AsyncSession, user: User, profile: Profile) -> User:
    db.add(user)
    await db.flush()
    profile.id = user.id
    db.add(profile)
    await db.flush()
    await db.refresh(user)
    return user


async def update(db: AsyncSession, user: User) -> User:
    await db.flush()
    return user


async def update_profile(db: AsyncSession, profile: Profile) -> Profile:
    await db.flush()
    await db.refresh(profile)
    return profile
