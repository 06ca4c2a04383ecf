"""Create an admin account, or grant admin to an existing one.

Usage (from the repository root):
    python scripts/create_admin.py admin@example.com 'a-strong-password'

Prerequisites:
    - DB is running and migrated (alembic upgrade head)
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Windows: asyncpg requires SelectorEventLoop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory, engine
from app.models.user import Profile, User
from app.repositories import user_repository
from app.services.auth_service import hash_password


async def ensure_admin(session: AsyncSession, email: str, password: str) -> User:
    """Idempotent: an existing account keeps its password and gains the flag."""
    user = await user_repository.get_by_email(session, email)
    if user is None:
        user = await user_repository.create(
            session,
            User(email=email.lower(), password_hash=hash_password(password), is_active=True),
            Profile(is_admin=True),
        )
        print(f"Created admin {user.email} (id={user.id})")
        return user

    profile = await user_repository.get_profile(session, user.id)
    if profile is None:
        profile = Profile(id=user.id, is_admin=True)
        session.add(profile)
    elif profile.is_admin:
        print(f"{user.email} is already an admin")
        return user
    profile.is_admin = True
    await session.flush()
    print(f"Granted admin to {user.email}")
    return user


async def main(email: str, password: str) -> None:
    async with async_session_factory() as session:
        await ensure_admin(session, email, password)
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()
    if len(args.password) < 8:
        parser.error("password must be at least 8 characters")
    asyncio.run(main(args.email, args.password))
