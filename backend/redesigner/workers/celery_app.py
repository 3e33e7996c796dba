"""Celery application configuration."""

from celery import Celery
from celery.signals import setup_logging

from redesigner.config import get_settings
from redesigner.logging_config import configure_logging

settings = get_settings()


@setup_logging.connect
def on_setup_logging(**kwargs):
    configure_logging()


celery_app = Celery(
    "redesigner",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["redesigner.workers.tasks"],
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_always_eager=settings.celery_task_always_eager,
    task_eager_propagates=False,
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_concurrency=4,
    worker_hijack_root_logger=False,  # Don't hijack root logger (we configure it ourselves)
    worker_redirect_stdouts=True,
    worker_redirect_stdouts_level="INFO",
    # Result backend
    result_expires=3600,  # 1 hour
)
