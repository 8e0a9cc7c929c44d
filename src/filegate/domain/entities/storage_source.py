"""Storage source entity.

Only the attributes needed to delete and duplicate a storage source are
modelled here; provider-specific settings live with each provider adapter.
"""

from dataclasses import dataclass
from enum import Enum


class StorageType(str, Enum):
    """Supported storage backends."""

    LOCAL = "local"
    S3 = "s3"
    WEBDAV = "webdav"
    FTP = "ftp"
    SFTP = "sftp"
    ONE_DRIVE = "onedrive"
    ONE_DRIVE_CHINA = "onedrive-china"
    SHAREPOINT_DRIVE = "sharepoint"
    GOOGLE_DRIVE = "google-drive"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    StorageType.LOCAL: "Local Storage",
    StorageType.S3: "S3 Compatible Storage",
    StorageType.WEBDAV: "WebDAV",
    StorageType.FTP: "FTP",
    StorageType.SFTP: "SFTP",
    StorageType.ONE_DRIVE: "OneDrive",
    StorageType.ONE_DRIVE_CHINA: "OneDrive (21Vianet)",
    StorageType.SHAREPOINT_DRIVE: "SharePoint",
    StorageType.GOOGLE_DRIVE: "Google Drive",
}


@dataclass
class StorageSource:
    """Storage source entity.

    Attributes:
        id: Auto-assigned ID, None until persisted.
        name: Display name.
        key: Unique URL-safe identifier.
        type: Backend type.
        enable: Whether the storage source is visible to users.
        order_num: Sort position among storage sources.
    """

    name: str
    key: str
    type: StorageType
    enable: bool = True
    order_num: int = 0
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate storage source after initialization."""
        if not self.name:
            raise ValueError("Storage source name is required")
        if not self.key:
            raise ValueError("Storage source key is required")
        if not isinstance(self.type, StorageType):
            self.type = StorageType(self.type)
