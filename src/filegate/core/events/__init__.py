"""Storage source notification channel."""

from filegate.core.events.storage_events import (
    DispatchResult,
    RegisteredListener,
    StorageSourceCopyEvent,
    StorageSourceDeleteEvent,
    StorageSourceEventChannel,
    get_event_channel,
)

__all__ = [
    "DispatchResult",
    "RegisteredListener",
    "StorageSourceCopyEvent",
    "StorageSourceDeleteEvent",
    "StorageSourceEventChannel",
    "get_event_channel",
]
