"""Advisor Directory Backend - FastAPI Entry Point."""
import sys

# asyncpg is incompatible with Windows ProactorEventLoop (default on Windows).
# Must be set before any asyncio usage.
if sys.platform == "win32":
    import asyncio
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI

from app.config import settings
from app.database import engine
from app.middleware.cors import setup_cors, setup_cookie_security
from app.middleware.error_handler import setup_error_handlers
from app.middleware.logging_middleware import LoggingMiddleware, configure_logging
from app.middleware.rate_limiter import RateLimitMiddleware
from app.middleware.audit_middleware import AuditMiddleware
from app.middleware.metrics import MetricsMiddleware, setup_metrics
from app.api.v1 import auth as auth_router
from app.api.v1 import profiles as profiles_router
from app.api.v1 import advisors as advisors_router
from app.api.v1 import investment_firms as investment_firms_router
from app.api.v1 import accounting_firms as accounting_firms_router
from app.api.v1 import blog as blog_router
from app.api.v1 import meeting_requests as meeting_requests_router
from app.api.v1 import newsletter as newsletter_router
from app.api.v1 import uploads as uploads_router
from app.api.v1 import sitemap as sitemap_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("startup", env=settings.APP_ENV)
    if settings.SENTRY_DSN:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            traces_sample_rate=0.1 if settings.APP_ENV == "production" else 1.0,
            environment=settings.APP_ENV,
        )

    yield

    from app.utils.redis_client import close_redis
    await close_redis()
    await engine.dispose()
    logger.info("shutdown")


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(
        title="Advisor Directory API",
        description="Directory of financial advisors, investment firms and accounting firms",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Middleware (order matters: last added = first executed)
    setup_cors(application)
    setup_cookie_security(application)
    setup_error_handlers(application)
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(RateLimitMiddleware)
    application.add_middleware(AuditMiddleware)
    application.add_middleware(MetricsMiddleware)

    setup_metrics(application)

    # API Routers
    application.include_router(auth_router.router, prefix="/api/v1/auth", tags=["Auth"])
    application.include_router(profiles_router.router, prefix="/api/v1/profiles", tags=["Profiles"])
    application.include_router(advisors_router.router, prefix="/api/v1/advisors", tags=["Advisors"])
    application.include_router(
        investment_firms_router.router, prefix="/api/v1/investment-firms", tags=["Investment Firms"],
    )
    application.include_router(
        accounting_firms_router.router, prefix="/api/v1/accounting-firms", tags=["Accounting Firms"],
    )
    application.include_router(blog_router.router, prefix="/api/v1/blog", tags=["Blog"])
    application.include_router(
        meeting_requests_router.router, prefix="/api/v1/meeting-requests", tags=["Meeting Requests"],
    )
    application.include_router(newsletter_router.router, prefix="/api/v1/newsletter", tags=["Newsletter"])
    application.include_router(uploads_router.router, prefix="/api/v1/uploads", tags=["Uploads"])
    application.include_router(sitemap_router.router, tags=["Sitemap"])

    # Health check
    @application.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
