"""Celery workers for domain event delivery.

Usage:
    # Start worker
    celery -A user_service.presentation.workers worker -Q user-created,user-updated --loglevel=info

    # Start flower (monitoring)
    celery -A user_service.presentation.workers flower --port=5555
"""

from .celery_app import celery_app

__all__ = ["celery_app"]
