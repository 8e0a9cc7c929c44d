import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from filegate.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.app_name == "filegate"
    assert settings.environment == "development"
    assert settings.debug is False
    assert settings.filter_cache_ttl_seconds == 300
    assert settings.filter_case_sensitive is True
    assert settings.onedrive_china.client_id is None
    assert "offline_access" in settings.onedrive_china.scope
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "FILEGATE_ENVIRONMENT": "production",
        "FILEGATE_DEBUG": "true",
        "FILEGATE_FILTER_CACHE_TTL_SECONDS": "0",
        "FILEGATE_FILTER_CASE_SENSITIVE": "false",
    }):
        settings = Settings(_env_file=None)

    assert settings.environment == "production"
    assert settings.debug is True
    assert settings.filter_cache_ttl_seconds == 0
    assert settings.filter_case_sensitive is False
    assert settings.is_production is True


def test_onedrive_china_nested_env():
    """Test that the OneDrive China section is read from nested variables."""
    with patch.dict(os.environ, {
        "FILEGATE_ONEDRIVE_CHINA__CLIENT_ID": "cn-client",
        "FILEGATE_ONEDRIVE_CHINA__CLIENT_SECRET": "cn-secret",
        "FILEGATE_ONEDRIVE_CHINA__REDIRECT_URI": "https://example.cn/callback",
    }):
        settings = Settings(_env_file=None)

    assert settings.onedrive_china.client_id == "cn-client"
    assert settings.onedrive_china.client_secret == "cn-secret"
    assert settings.onedrive_china.redirect_uri == "https://example.cn/callback"


def test_negative_cache_ttl_rejected():
    """Test that a negative TTL fails validation."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, filter_cache_ttl_seconds=-1)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
