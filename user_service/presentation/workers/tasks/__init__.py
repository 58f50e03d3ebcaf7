"""Celery tasks."""

from .user_event_tasks import handle_user_event, process_event_message

__all__ = [
    "handle_user_event",
    "process_event_message",
]
