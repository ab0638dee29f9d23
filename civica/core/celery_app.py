"""Celery application for background tasks (moderation notifications)."""
from celery import Celery

from civica.core.config import settings

celery_app = Celery(
    "civica",
    broker=settings.CELERY_BROKER_URL,
    include=["civica.workers.notifications"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)
