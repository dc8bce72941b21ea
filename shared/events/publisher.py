"""
Event Publisher Interface
=========================

Abstract base class and models for outcome event publishing.

Every registry mutation, successful or not, is announced as an
OutcomeEvent once its transaction has committed.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from shared.config import PublisherMode, settings
from shared.logging import get_logger

logger = get_logger(__name__)


class OutcomeEventType(str, Enum):
    """Types of outcome events."""

    IDENTITY_REGISTERED = "identity_registered"
    ASSET_CREATED = "asset_created"
    ASSET_DELETED = "asset_deleted"
    FORECAST_ADDED = "forecast_added"
    ACTUAL_ADDED = "actual_added"


class OutcomeEvent(BaseModel):
    """Published record of a single mutation outcome."""

    id: str = Field(..., description="Unique event ID")
    sequence: int = Field(..., ge=0, description="Publish order, dense from 0")
    event_type: OutcomeEventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        """Whether the announced mutation succeeded."""
        return bool(self.payload.get("success", False))


Subscriber = Callable[[OutcomeEvent], None]


class EventPublisher(ABC):
    """
    Abstract base class for outcome publishers.

    Implements the Strategy pattern for different delivery backends.
    """

    @property
    @abstractmethod
    def mode(self) -> PublisherMode:
        """Get the publisher mode."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the delivery backend."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the delivery backend."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check publisher health."""
        ...

    @abstractmethod
    async def publish(
        self,
        event_type: OutcomeEventType,
        payload: dict[str, Any],
    ) -> OutcomeEvent:
        """
        Publish an outcome event.

        Args:
            event_type: Kind of mutation being announced
            payload: Outcome fields, JSON-compatible

        Returns:
            The published OutcomeEvent
        """
        ...

    @abstractmethod
    async def recent(
        self,
        limit: int = 100,
        event_type: OutcomeEventType | None = None,
    ) -> list[OutcomeEvent]:
        """
        Get recently published events.

        Args:
            limit: Maximum events to return
            event_type: Only return events of this type

        Returns:
            List of OutcomeEvents, newest first
        """
        ...

    @abstractmethod
    def subscribe(self, callback: Subscriber) -> None:
        """Register a callback invoked synchronously for every published event."""
        ...

    @abstractmethod
    def unsubscribe(self, callback: Subscriber) -> None:
        """Remove a previously registered callback."""
        ...


# Global publisher instance
_publisher: EventPublisher | None = None


def get_event_publisher() -> EventPublisher:
    """
    Get the configured event publisher instance.

    Returns:
        EventPublisher instance based on settings
    """
    global _publisher

    if _publisher is None:
        mode = settings.events.mode

        if mode == PublisherMode.MEMORY:
            from shared.events.memory import InMemoryEventPublisher

            _publisher = InMemoryEventPublisher(
                history_limit=settings.events.history_limit,
            )
        else:
            raise ValueError(f"Unknown event publisher mode: {mode}")

        logger.info(
            "event_publisher_initialized",
            mode=mode.value,
        )

    return _publisher


def set_event_publisher(publisher: EventPublisher) -> None:
    """
    Set a custom event publisher.

    Args:
        publisher: EventPublisher instance
    """
    global _publisher
    _publisher = publisher
    logger.info(
        "event_publisher_set",
        mode=publisher.mode.value,
    )


def reset_event_publisher() -> None:
    """Reset the publisher to be re-initialized."""
    global _publisher
    _publisher = None
