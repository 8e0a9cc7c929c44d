"""Domain entities for filegate.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from filegate.domain.entities.filter_rule import FilterMode, FilterRule
from filegate.domain.entities.storage_permission import FileOperatorType
from filegate.domain.entities.storage_source import StorageSource, StorageType

__all__ = [
    "FileOperatorType",
    "FilterMode",
    "FilterRule",
    "StorageSource",
    "StorageType",
]
