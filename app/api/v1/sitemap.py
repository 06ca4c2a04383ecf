"""Sitemap endpoint, mounted at the site root."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_db
from app.services import site_service

router = APIRouter()


# GET /sitemap.xml
@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(db: AsyncSession = Depends(get_db)):
    xml = await site_service.render_sitemap(db, settings.SITE_URL)
    return Response(content=xml, media_type="application/xml")
