"""OneDrive storage provider base class.

The global OneDrive service and its regional variants share the Microsoft
Graph API and the OAuth 2.0 authorization code flow. They differ only in the
hosts they talk to and in where their client credentials come from, so each
variant overrides the endpoint properties and the credential getters while
this base class builds every URL and request from them.
"""

import abc
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from filegate.core.logging import get_logger
from filegate.domain.entities.storage_source import StorageType

logger = get_logger(__name__)


class StorageConfigurationError(Exception):
    """Raised when a storage provider is missing required configuration."""
    pass


class OneDriveParam(BaseModel):
    """Per-storage-source OneDrive settings.

    Client credentials left as None fall back to the application-wide
    values of the provider variant.
    """

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class OneDriveServiceBase(abc.ABC):
    """Abstract base class for OneDrive provider variants."""

    def __init__(self, param: OneDriveParam | None = None) -> None:
        """Initialize the provider.

        Args:
            param: Storage source specific settings, or None to rely entirely
                on application-wide credentials.
        """
        self.param = param

    @property
    @abc.abstractmethod
    def storage_type(self) -> StorageType:
        """Storage type implemented by this variant."""
        pass

    @property
    @abc.abstractmethod
    def graph_endpoint(self) -> str:
        """Host name of the Microsoft Graph API (e.g. 'graph.microsoft.com')."""
        pass

    @property
    @abc.abstractmethod
    def authenticate_endpoint(self) -> str:
        """Host name of the OAuth 2.0 authority (e.g. 'login.microsoftonline.com')."""
        pass

    @abc.abstractmethod
    def get_client_id(self) -> str | None:
        pass

    @abc.abstractmethod
    def get_client_secret(self) -> str | None:
        pass

    @abc.abstractmethod
    def get_redirect_uri(self) -> str | None:
        pass

    @abc.abstractmethod
    def get_scope(self) -> str:
        pass

    @property
    def graph_api_url(self) -> str:
        return f"https://{self.graph_endpoint}/v1.0"

    @property
    def authorize_url(self) -> str:
        return f"https://{self.authenticate_endpoint}/common/oauth2/v2.0/authorize"

    @property
    def token_url(self) -> str:
        return f"https://{self.authenticate_endpoint}/common/oauth2/v2.0/token"

    def _require(self, value: str | None, name: str) -> str:
        if not value:
            raise StorageConfigurationError(
                f"{self.storage_type.description}: missing required setting '{name}'"
            )
        return value

    async def get_authorization_url(self, state: str) -> str:
        """Generate the URL that starts the authorization code flow.

        Args:
            state: Opaque value echoed back to the redirect URI.

        Raises:
            StorageConfigurationError: If client ID or redirect URI is unresolved.
        """
        params = {
            "client_id": self._require(self.get_client_id(), "client_id"),
            "redirect_uri": self._require(self.get_redirect_uri(), "redirect_uri"),
            "response_type": "code",
            "scope": self.get_scope(),
            "state": state,
            "response_mode": "query",
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code_for_tokens(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for access and refresh tokens.

        Raises:
            StorageConfigurationError: If credentials are unresolved.
            ValueError: If the authority rejects the request.
        """
        data = {
            "client_id": self._require(self.get_client_id(), "client_id"),
            "client_secret": self._require(self.get_client_secret(), "client_secret"),
            "redirect_uri": self._require(self.get_redirect_uri(), "redirect_uri"),
            "code": code,
            "grant_type": "authorization_code",
            "scope": self.get_scope(),
        }
        tokens = await self._post_token_request(data)
        self._store_tokens(tokens)
        return tokens

    async def refresh_access_token(self) -> dict[str, Any]:
        """Obtain a new access token using the stored refresh token.

        Raises:
            StorageConfigurationError: If credentials or the refresh token are missing.
            ValueError: If the authority rejects the request.
        """
        refresh_token = self.param.refresh_token if self.param else None
        data = {
            "client_id": self._require(self.get_client_id(), "client_id"),
            "client_secret": self._require(self.get_client_secret(), "client_secret"),
            "redirect_uri": self._require(self.get_redirect_uri(), "redirect_uri"),
            "refresh_token": self._require(refresh_token, "refresh_token"),
            "grant_type": "refresh_token",
            "scope": self.get_scope(),
        }
        tokens = await self._post_token_request(data)
        self._store_tokens(tokens)
        return tokens

    async def _post_token_request(self, data: dict[str, str]) -> dict[str, Any]:
        async with httpx.AsyncClient() as client:
            response = await client.post(self.token_url, data=data)

            if response.status_code != 200:
                try:
                    error_data = response.json()
                    error_msg = error_data.get("error_description", error_data.get("error", "Unknown error"))
                except Exception:
                    error_msg = response.text
                logger.error(
                    "OneDrive token request failed",
                    storage_type=self.storage_type.value,
                    grant_type=data["grant_type"],
                    status_code=response.status_code,
                    error=error_msg,
                )
                raise ValueError(f"Failed to obtain {self.storage_type.description} token: {error_msg}")

            return response.json()

    def _store_tokens(self, tokens: dict[str, Any]) -> None:
        if self.param is None:
            self.param = OneDriveParam()
        self.param.access_token = tokens.get("access_token", self.param.access_token)
        self.param.refresh_token = tokens.get("refresh_token", self.param.refresh_token)
