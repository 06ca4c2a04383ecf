"""Newsletter API."""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_admin
from app.models.user import User
from app.schemas.common import APIResponse, PaginationMeta
from app.schemas.newsletter import NewsletterSignupResponse, NewsletterSubscribe
from app.services import newsletter_service

router = APIRouter()


# POST /newsletter/subscribe - public; repeat signups are not an error
@router.post("/subscribe", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(body: NewsletterSubscribe, response: Response, db: AsyncSession = Depends(get_db)):
    signup, created = await newsletter_service.subscribe(db, body)
    if not created:
        response.status_code = status.HTTP_200_OK
    return APIResponse(
        status="success",
        data=NewsletterSignupResponse.model_validate(signup).model_dump(),
        message="Subscribed" if created else "Already subscribed",
    )


# GET /newsletter/subscribers - admin
@router.get("/subscribers", response_model=APIResponse)
async def list_subscribers(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    signups, total = await newsletter_service.list_subscribers(db, page, per_page)
    return APIResponse(
        status="success",
        data=[NewsletterSignupResponse.model_validate(s).model_dump() for s in signups],
        pagination=PaginationMeta.build(total, page, per_page),
    )
