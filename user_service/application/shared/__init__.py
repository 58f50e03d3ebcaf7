"""Shared Application Layer components (ports used by use cases)."""

from .event_publisher import EventPublisher, EventPublishError
from .transaction_manager import TransactionManager

__all__ = [
    "EventPublisher",
    "EventPublishError",
    "TransactionManager",
]
