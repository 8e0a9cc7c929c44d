"""SQLAlchemy models for filegate tables.

All models inherit from the Base class defined in database.py and are
created on startup in development mode.
"""

from filegate.infrastructure.persistence.models.filter_rule import FilterRuleModel
from filegate.infrastructure.persistence.models.storage_source import StorageSourceModel
from filegate.infrastructure.persistence.models.user_storage_source import (
    UserStorageSourceModel,
)

__all__ = [
    "FilterRuleModel",
    "StorageSourceModel",
    "UserStorageSourceModel",
]
