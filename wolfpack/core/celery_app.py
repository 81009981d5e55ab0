"""Celery application for background tasks (push notifications)."""
from celery import Celery
from celery.signals import setup_logging

from wolfpack.core.config import settings
from wolfpack.core.log import configure_logging

celery_app = Celery(
    "wolfpack",
    broker=settings.CELERY_BROKER_URL,
    include=["wolfpack.workers.notifications"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_ignore_result=True,
)


@setup_logging.connect
def _configure_worker_logging(**kwargs):
    configure_logging()
