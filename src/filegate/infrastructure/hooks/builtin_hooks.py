"""Built-in storage source listeners.

These listeners keep data owned by other services consistent with the
storage source table. They run with a negative priority, so application
listeners subscribed at the default priority run before them.

Built-in listeners:
- filter rules are deleted with their storage source
- filter rules are duplicated with their storage source
"""

from filegate.core.events import (
    StorageSourceCopyEvent,
    StorageSourceDeleteEvent,
    StorageSourceEventChannel,
)
from filegate.core.logging import get_logger
from filegate.domain.services.filter_rule_service import FilterRuleService

logger = get_logger(__name__)

BUILTIN_PRIORITY = -100


def register_builtin_listeners(
    channel: StorageSourceEventChannel, filter_rule_service: FilterRuleService
) -> list[str]:
    """Register all built-in listeners.

    Args:
        channel: The channel to subscribe to.
        filter_rule_service: Service whose rules follow storage source changes.

    Returns:
        List of listener IDs.
    """
    listener_ids = [
        channel.subscribe(
            StorageSourceDeleteEvent,
            filter_rule_service.on_storage_source_delete,
            priority=BUILTIN_PRIORITY,
        ),
        channel.subscribe(
            StorageSourceCopyEvent,
            filter_rule_service.on_storage_source_copy,
            priority=BUILTIN_PRIORITY,
        ),
    ]

    logger.info("Registered built-in storage source listeners", count=len(listener_ids))
    return listener_ids
