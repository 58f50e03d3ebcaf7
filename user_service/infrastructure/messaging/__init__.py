"""Messaging infrastructure - event publishers, wire schemas, Event Bus."""

from .celery_publisher import (
    EVENT_TASK_NAME,
    CeleryEventPublisher,
    create_producer_app,
)
from .event_bus import EventBus, EventHandler, get_event_bus, reset_event_bus
from .factory import create_event_publisher
from .in_memory_publisher import InMemoryEventPublisher
from .serialization import InvalidEventMessage, parse_event, to_domain_event

__all__ = [
    # Event Bus
    "EventBus",
    "EventHandler",
    "get_event_bus",
    "reset_event_bus",
    # Publishers
    "CeleryEventPublisher",
    "InMemoryEventPublisher",
    "create_event_publisher",
    "create_producer_app",
    "EVENT_TASK_NAME",
    # Wire format
    "InvalidEventMessage",
    "parse_event",
    "to_domain_event",
]
