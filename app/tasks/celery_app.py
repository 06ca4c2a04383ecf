"""Celery application configuration and Beat schedule."""
from celery import Celery
from celery.schedules import crontab

from app.config import settings

celery_app = Celery(
    "advisor_directory",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_routes={
        "app.tasks.site_tasks.*": {"queue": "low"},
    },
    task_default_retry_delay=60,
    task_max_retries=3,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=3600,
)

celery_app.conf.beat_schedule = {
    "regenerate-sitemap": {
        "task": "app.tasks.site_tasks.regenerate_sitemap",
        "schedule": crontab(hour=3, minute=0),
    },
    "rebuild-static-site": {
        "task": "app.tasks.site_tasks.rebuild_static_site",
        "schedule": crontab(hour=3, minute=30),
    },
}

celery_app.autodiscover_tasks(["app.tasks.site_tasks"])
