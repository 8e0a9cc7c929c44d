"""OneDrive operated by 21Vianet (China cloud)."""

from filegate.core.config import Settings, get_settings
from filegate.domain.entities.storage_source import StorageType
from filegate.infrastructure.storage.onedrive.base import OneDriveParam, OneDriveServiceBase


class OneDriveChinaService(OneDriveServiceBase):
    """OneDrive variant for the China sovereign cloud.

    Credentials set on the storage source win; missing ones fall back to
    the application-wide onedrive_china settings. The scope always comes
    from settings.
    """

    def __init__(self, param: OneDriveParam | None = None, settings: Settings | None = None) -> None:
        super().__init__(param)
        self.settings = settings or get_settings()

    @property
    def storage_type(self) -> StorageType:
        return StorageType.ONE_DRIVE_CHINA

    @property
    def graph_endpoint(self) -> str:
        return "microsoftgraph.chinacloudapi.cn"

    @property
    def authenticate_endpoint(self) -> str:
        return "login.partner.microsoftonline.cn"

    def get_client_id(self) -> str | None:
        if self.param is None or self.param.client_id is None:
            return self.settings.onedrive_china.client_id
        return self.param.client_id

    def get_redirect_uri(self) -> str | None:
        if self.param is None or self.param.redirect_uri is None:
            return self.settings.onedrive_china.redirect_uri
        return self.param.redirect_uri

    def get_client_secret(self) -> str | None:
        if self.param is None or self.param.client_secret is None:
            return self.settings.onedrive_china.client_secret
        return self.param.client_secret

    def get_scope(self) -> str:
        return self.settings.onedrive_china.scope
