from celery import Celery

from config import settings

celery_app = Celery(
    "shoelens",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["workers.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=1800,
    task_soft_time_limit=1500,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)

celery_app.conf.beat_schedule = {
    "sync-articles": {
        "task": "workers.tasks.sync_articles",
        "schedule": settings.sync_interval_minutes * 60.0,
    },
}
