"""Persistence repositories for database operations."""

from filegate.infrastructure.persistence.repositories.filter_rule_repository import (
    FilterRuleRepository,
)
from filegate.infrastructure.persistence.repositories.storage_source_repository import (
    StorageSourceRepository,
)
from filegate.infrastructure.persistence.repositories.user_storage_source_repository import (
    UserStorageSourceRepository,
)

__all__ = [
    "FilterRuleRepository",
    "StorageSourceRepository",
    "UserStorageSourceRepository",
]
