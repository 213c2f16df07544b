"""
Celery application - async task queue with RabbitMQ (queue management).
Challenge: Decouple search indexing and profile repair from the HTTP request.
Design: RabbitMQ broker; Redis as result backend; beat runs the reconciliation sweep periodically.
"""

from celery import Celery

from nexar.config import get_settings

settings = get_settings()

celery_app = Celery(
    "nexar",
    broker=settings.celery_broker_url,
    backend=settings.redis_url,
    include=["nexar.queue.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_track_started=True,
    task_time_limit=300,
    task_soft_time_limit=60,
    worker_prefetch_multiplier=1,  # Fair distribution
    beat_schedule={
        "reconcile-profiles": {
            "task": "nexar.queue.tasks.reconcile_profiles_task",
            "schedule": float(settings.reconcile_interval_seconds),
        },
    },
)
