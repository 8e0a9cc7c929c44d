"""Storage provider adapters."""

from filegate.infrastructure.storage.onedrive import (
    OneDriveChinaService,
    OneDriveParam,
    OneDriveServiceBase,
    StorageConfigurationError,
)

__all__ = [
    "OneDriveChinaService",
    "OneDriveParam",
    "OneDriveServiceBase",
    "StorageConfigurationError",
]
