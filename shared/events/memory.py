"""
In-Memory Event Publisher
=========================

Process-local publisher for development and testing.

Version: 0.1.0
"""

import uuid
from collections import deque
from datetime import UTC, datetime
from typing import Any

from shared.config import PublisherMode
from shared.events.publisher import (
    EventPublisher,
    OutcomeEvent,
    OutcomeEventType,
    Subscriber,
)
from shared.logging import get_logger

logger = get_logger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """
    In-memory outcome publisher.

    Keeps published events in a bounded history and fans them out to
    synchronous subscribers. Data is lost on restart.
    """

    def __init__(self, history_limit: int = 0) -> None:
        """
        Initialize publisher with in-memory storage.

        Args:
            history_limit: Events retained for `recent`; 0 keeps everything
        """
        self._connected = False
        self._sequence = 0
        self._history: deque[OutcomeEvent] = deque(maxlen=history_limit or None)
        self._subscribers: list[Subscriber] = []
        self._subscriber_failures = 0

        logger.debug("memory_publisher_initialized", history_limit=history_limit)

    @property
    def mode(self) -> PublisherMode:
        return PublisherMode.MEMORY

    async def connect(self) -> None:
        """Simulate connection."""
        self._connected = True
        logger.info("memory_publisher_connected")

    async def disconnect(self) -> None:
        """Simulate disconnection."""
        self._connected = False
        logger.info("memory_publisher_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check publisher health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": self._connected,
            "published": self._sequence,
            "retained": len(self._history),
            "subscribers": len(self._subscribers),
            "subscriber_failures": self._subscriber_failures,
        }

    async def publish(
        self,
        event_type: OutcomeEventType,
        payload: dict[str, Any],
    ) -> OutcomeEvent:
        """Publish an outcome event."""
        event = OutcomeEvent(
            id=f"evt:{uuid.uuid4()}",
            sequence=self._sequence,
            event_type=event_type,
            timestamp=datetime.now(UTC),
            payload=payload,
        )
        self._sequence += 1
        self._history.append(event)

        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                # Delivery problems never undo a committed mutation
                self._subscriber_failures += 1
                logger.error(
                    "subscriber_failed",
                    event_id=event.id,
                    event_type=event_type.value,
                    error=str(e),
                )

        logger.debug(
            "outcome_published",
            event_id=event.id,
            event_type=event_type.value,
            sequence=event.sequence,
        )

        return event

    async def recent(
        self,
        limit: int = 100,
        event_type: OutcomeEventType | None = None,
    ) -> list[OutcomeEvent]:
        """Get recent events, newest first."""
        events = [
            e for e in reversed(self._history)
            if event_type is None or e.event_type == event_type
        ]
        return events[:limit]

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    # =========================================================================
    # Test Utilities
    # =========================================================================

    def clear_all(self) -> None:
        """Clear all retained events and subscribers (for testing)."""
        self._history.clear()
        self._subscribers.clear()
        self._sequence = 0
        self._subscriber_failures = 0
        logger.debug("memory_publisher_cleared")

    def get_stats(self) -> dict[str, int]:
        """Get storage statistics."""
        return {
            "published": self._sequence,
            "retained": len(self._history),
            "subscribers": len(self._subscribers),
        }
