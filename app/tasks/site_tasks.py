"""Static site tasks - LOW queue.

Regenerates the sitemap and the pre-rendered pages from the database.
"""
import asyncio
import logging

from app.config import settings
from app.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name="app.tasks.site_tasks.regenerate_sitemap")
def regenerate_sitemap(output_dir: str | None = None) -> dict:
    """Daily: write ``sitemap.xml`` with every public detail URL."""
    from app.database import async_session_factory
    from app.services import site_service

    target_dir = output_dir or settings.SSG_OUTPUT_DIR

    async def _run():
        async with async_session_factory() as db:
            return await site_service.publish_sitemap(db, target_dir, settings.SITE_URL)

    path = asyncio.run(_run())
    logger.info("Sitemap regenerated at %s", path)
    return {"path": str(path)}


@celery_app.task(name="app.tasks.site_tasks.rebuild_static_site")
def rebuild_static_site(output_dir: str | None = None) -> dict:
    """Nightly: re-render listing and detail pages for crawlers."""
    from app.database import async_session_factory
    from app.services import site_service

    target_dir = output_dir or settings.SSG_OUTPUT_DIR

    async def _run():
        async with async_session_factory() as db:
            return await site_service.publish_static_site(db, target_dir, settings.SITE_URL)

    written = asyncio.run(_run())
    logger.info("Static site rebuilt: %d pages in %s", len(written), target_dir)
    return {"pages": len(written), "output_dir": target_dir}
