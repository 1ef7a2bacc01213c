"""
Domain Events - Things that happened during a sync pass.

Events are immutable records of something that occurred.
They enable loose coupling and per-pass summaries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from .enums import SyncAction


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class SyncStarted(DomainEvent):
    """Event: A sync pass started."""

    account_name: str = ""


@dataclass(frozen=True)
class NodeSynced(DomainEvent):
    """Event: A sync action was applied to a node."""

    action: SyncAction = SyncAction.NONE
    remote_id: Optional[str] = None
    local_id: Optional[int] = None
    name: str = ""


@dataclass(frozen=True)
class NodeFailed(DomainEvent):
    """Event: Applying a sync action to a node failed."""

    action: SyncAction = SyncAction.ERROR
    remote_id: Optional[str] = None
    local_id: Optional[int] = None
    error: str = ""


@dataclass(frozen=True)
class SyncCompleted(DomainEvent):
    """Event: A sync pass completed."""

    account_name: str = ""
    nodes_processed: int = 0
    cancelled: bool = False
    errors: list = field(default_factory=list)


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    This enables loose coupling between components.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        # Call specific handlers
        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Call catch-all handlers
        for handler in self._handlers.get(DomainEvent, []):
            handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
