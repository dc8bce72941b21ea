"""
Events Module
=============

Outcome notification layer for registry mutations.

Supports:
- Memory (development/testing)
- Host-provided backends installed with `set_event_publisher`

Usage:
    from shared.events import get_event_publisher, OutcomeEventType

    publisher = get_event_publisher()

    event = await publisher.publish(
        OutcomeEventType.ASSET_CREATED,
        {"success": True, "new_index": 0},
    )

    publisher.subscribe(lambda e: print(e.event_type, e.payload))
"""

from shared.events.publisher import (
    EventPublisher,
    OutcomeEvent,
    OutcomeEventType,
    Subscriber,
    get_event_publisher,
    reset_event_publisher,
    set_event_publisher,
)
from shared.events.memory import InMemoryEventPublisher

__all__ = [
    # Publisher
    "EventPublisher",
    "get_event_publisher",
    "set_event_publisher",
    "reset_event_publisher",
    # Models
    "OutcomeEvent",
    "OutcomeEventType",
    "Subscriber",
    # Implementations
    "InMemoryEventPublisher",
]
