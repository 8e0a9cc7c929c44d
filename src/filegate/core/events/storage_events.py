"""Storage source notifications.

Other subsystems keep data keyed by storage source (filter rules, user
permissions, ...). Rather than having the storage source service know about
each of them, it publishes one of two narrowly-typed events and interested
services subscribe to the channel:

- StorageSourceDeleteEvent: a storage source row has been removed.
- StorageSourceCopyEvent: a storage source has been duplicated.

Example:
    channel = StorageSourceEventChannel()
    channel.subscribe(StorageSourceDeleteEvent, filter_service.on_storage_source_delete)

    await channel.publish(StorageSourceDeleteEvent(id=3, name="docs", type=StorageType.LOCAL))
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

from filegate.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StorageSourceDeleteEvent:
    """Published after a storage source has been deleted.

    Attributes:
        id: ID of the deleted storage source.
        name: Its display name, for logging.
        type: Its storage type (a StorageType member), for logging.
    """

    id: int
    name: str
    type: Any


@dataclass(frozen=True)
class StorageSourceCopyEvent:
    """Published after a storage source has been duplicated.

    Attributes:
        from_id: ID of the storage source that was copied.
        new_id: ID of the newly created copy.
    """

    from_id: int
    new_id: int


StorageSourceEvent = Union[StorageSourceDeleteEvent, StorageSourceCopyEvent]
Listener = Callable[[Any], Awaitable[Any]]


@dataclass
class RegisteredListener:
    """Internal representation of a subscribed listener.

    Attributes:
        id: Unique identifier for this subscription.
        event_type: The event class this listener receives.
        callback: The async function to call with the event.
        priority: Execution priority (higher = earlier).
        registration_order: Order in which this listener was subscribed.
    """

    id: str
    event_type: type
    callback: Listener
    priority: int = 0
    registration_order: int = 0


@dataclass
class DispatchResult:
    """Outcome of publishing one event.

    Attributes:
        delivered: Number of listeners that completed without error.
        errors: One message per failed listener.
    """

    delivered: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class StorageSourceEventChannel:
    """Delivers storage source events to subscribed listeners.

    Listeners run in priority order (higher first), then in subscription
    order. A failing listener is logged and recorded in the DispatchResult;
    the remaining listeners still run.
    """

    EVENT_TYPES: tuple[type, ...] = (StorageSourceDeleteEvent, StorageSourceCopyEvent)

    def __init__(self) -> None:
        self._listeners: dict[type, list[RegisteredListener]] = {}
        self._listener_map: dict[str, RegisteredListener] = {}
        self._registration_counter: int = 0

    def subscribe(self, event_type: type, callback: Listener, priority: int = 0) -> str:
        """Subscribe an async callback to an event type.

        Args:
            event_type: StorageSourceDeleteEvent or StorageSourceCopyEvent.
            callback: Async function receiving the event instance.
            priority: Higher priority listeners run first.

        Returns:
            Listener ID for later removal.

        Raises:
            ValueError: If event_type is not a storage source event.
        """
        if event_type not in self.EVENT_TYPES:
            raise ValueError(f"Unsupported storage source event type: {event_type!r}")

        listener_id = f"lsn_{uuid.uuid4().hex[:12]}"
        self._registration_counter += 1

        listener = RegisteredListener(
            id=listener_id,
            event_type=event_type,
            callback=callback,
            priority=priority,
            registration_order=self._registration_counter,
        )
        self._listeners.setdefault(event_type, []).append(listener)
        self._listener_map[listener_id] = listener

        logger.debug(
            "Storage source listener subscribed",
            listener_id=listener_id,
            event_type=event_type.__name__,
            priority=priority,
        )
        return listener_id

    def unsubscribe(self, listener_id: str) -> bool:
        """Remove a subscription.

        Returns:
            True if the listener was removed, False if it was not found.
        """
        listener = self._listener_map.pop(listener_id, None)
        if listener is None:
            logger.warning("Listener not found for unsubscribe", listener_id=listener_id)
            return False

        remaining = [
            entry for entry in self._listeners.get(listener.event_type, [])
            if entry.id != listener_id
        ]
        if remaining:
            self._listeners[listener.event_type] = remaining
        else:
            self._listeners.pop(listener.event_type, None)
        return True

    def get_listeners(self, event_type: type) -> list[RegisteredListener]:
        """Get listeners for an event type in execution order."""
        return sorted(
            self._listeners.get(event_type, []),
            key=lambda entry: (-entry.priority, entry.registration_order),
        )

    async def publish(self, event: StorageSourceEvent) -> DispatchResult:
        """Deliver an event to every listener subscribed to its type.

        Args:
            event: The event to deliver.

        Returns:
            DispatchResult with the delivery count and any listener errors.
        """
        result = DispatchResult()
        listeners = self.get_listeners(type(event))
        if not listeners:
            return result

        logger.debug(
            "Publishing storage source event",
            event_type=type(event).__name__,
            listener_count=len(listeners),
        )

        for listener in listeners:
            try:
                outcome = listener.callback(event)
                if asyncio.iscoroutine(outcome):
                    await outcome
                result.delivered += 1
            except Exception as e:
                logger.error(
                    "Storage source listener failed",
                    listener_id=listener.id,
                    event_type=type(event).__name__,
                    error=str(e),
                    exc_info=True,
                )
                result.errors.append(f"Listener {listener.id} failed: {e}")

        return result

    def clear(self) -> int:
        """Remove all subscriptions.

        Returns:
            Number of listeners removed.
        """
        count = len(self._listener_map)
        self._listeners.clear()
        self._listener_map.clear()
        return count


_channel: Optional[StorageSourceEventChannel] = None


def get_event_channel() -> StorageSourceEventChannel:
    """Get the process-wide storage source event channel."""
    global _channel
    if _channel is None:
        _channel = StorageSourceEventChannel()
    return _channel
