"""Newsletter signups."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.newsletter import NewsletterSignup
from app.repositories import newsletter_repository
from app.schemas.newsletter import NewsletterSubscribe

logger = logging.getLogger(__name__)


async def subscribe(db: AsyncSession, data: NewsletterSubscribe) -> tuple[NewsletterSignup, bool]:
    """Return the signup for the email and whether it was newly created."""
    email = str(data.email).strip().lower()
    existing = await newsletter_repository.get_by_email(db, email)
    if existing:
        return existing, False
    signup = await newsletter_repository.create(db, NewsletterSignup(name=data.name or None, email=email))
    logger.info("Newsletter signup %s", signup.id)
    return signup, True


async def list_subscribers(db: AsyncSession, page: int = 1, per_page: int = 50) -> tuple[list[NewsletterSignup], int]:
    return await newsletter_repository.list_signups(db, skip=(page - 1) * per_page, limit=per_page)
