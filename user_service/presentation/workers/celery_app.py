"""Celery Application Configuration.

Worker side of domain event delivery:
- Redis broker and result backend
- One queue per event type (user-created, user-updated)
- Task retry policies for handler failures

Usage:
    # Start worker on both event queues
    celery -A user_service.presentation.workers worker -Q user-created,user-updated --loglevel=info
"""

from celery import Celery, signals

from user_service.config import get_settings, setup_logging
from user_service.infrastructure.messaging import EVENT_TASK_NAME

settings = get_settings()

# Create Celery app
celery_app = Celery(
    "user_service_workers",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "user_service.presentation.workers.tasks.user_event_tasks",
    ],
)

# Celery configuration
celery_app.conf.update(
    # ==================== Task Settings ====================
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution
    task_acks_late=settings.celery_task_acks_late,
    task_reject_on_worker_lost=settings.celery_task_reject_on_worker_lost,
    task_time_limit=60,
    task_soft_time_limit=45,

    # Result backend
    task_ignore_result=True,
    result_expires=3600,

    # ==================== Worker Settings ====================
    worker_prefetch_multiplier=1,  # One task at a time for fair distribution
    worker_concurrency=settings.celery_worker_concurrency,
    worker_max_tasks_per_child=1000,  # Restart worker after N tasks (memory leaks)

    # ==================== Broker Settings ====================
    broker_connection_retry_on_startup=True,
    broker_connection_retry=True,
    broker_connection_max_retries=10,

    # ==================== Queues ====================
    # Producer picks the queue per event type; the worker listens on all of them
    task_default_queue=settings.event_queue_user_created,
    task_routes={
        EVENT_TASK_NAME: {"queue": settings.event_queue_user_created},
    },
)


@signals.setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Use structlog config instead of Celery's default root logger setup."""
    setup_logging()
