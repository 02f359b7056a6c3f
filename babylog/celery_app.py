"""Celery application configuration."""

from celery import Celery

from babylog.config import get_settings

settings = get_settings()

app = Celery(
    "babylog",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["babylog.tasks.analysis_tasks"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Analyses are cheap to recompute, keep results briefly
    result_expires=3600,  # 1 hour
)
