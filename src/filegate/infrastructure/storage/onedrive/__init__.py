"""OneDrive storage providers."""

from filegate.infrastructure.storage.onedrive.base import (
    OneDriveParam,
    OneDriveServiceBase,
    StorageConfigurationError,
)
from filegate.infrastructure.storage.onedrive.onedrive_china import OneDriveChinaService

__all__ = [
    "OneDriveChinaService",
    "OneDriveParam",
    "OneDriveServiceBase",
    "StorageConfigurationError",
]
