"""Domain services for filegate.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from filegate.domain.services.filter_rule_cache import ALL_RULES, FilterRuleCache
from filegate.domain.services.filter_rule_service import FilterRuleService
from filegate.domain.services.storage_permission_service import (
    StoragePermissionChecker,
    UserStorageSourceService,
)
from filegate.domain.services.storage_source_service import (
    StorageSourceKeyExistsError,
    StorageSourceNotFoundError,
    StorageSourceService,
)

__all__ = [
    "ALL_RULES",
    "FilterRuleCache",
    "FilterRuleService",
    "StorageSourceKeyExistsError",
    "StorageSourceNotFoundError",
    "StoragePermissionChecker",
    "StorageSourceService",
    "UserStorageSourceService",
]
