"""Per-user, per-storage-source operation permissions."""

from enum import Enum


class FileOperatorType(str, Enum):
    """Operations a user may be granted on a storage source.

    IGNORE_HIDDEN is the bypass capability: a user holding it sees hidden,
    inaccessible and download-blocked entries as if no filter rules existed.
    """

    AVAILABLE = "available"
    PREVIEW = "preview"
    DOWNLOAD = "download"
    UPLOAD = "upload"
    MKDIR = "mkdir"
    RENAME = "rename"
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"
    LINK = "link"
    SEARCH = "search"
    IGNORE_PASSWORD = "ignore_password"
    IGNORE_HIDDEN = "ignore_hidden"
