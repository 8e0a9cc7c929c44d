"""Unit tests for the FilterRule and StorageSource entities."""

import pytest

from filegate.domain.entities import FilterMode, FilterRule, StorageSource, StorageType


class TestFilterRule:
    """Test suite for FilterRule."""

    def test_defaults(self):
        rule = FilterRule(expression="*.tmp")

        assert rule.mode is FilterMode.HIDDEN
        assert rule.id is None
        assert rule.storage_id is None
        assert rule.description is None

    def test_mode_coerced_from_string(self):
        rule = FilterRule(expression="*.tmp", mode="disable_download")
        assert rule.mode is FilterMode.DISABLE_DOWNLOAD

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError, match="Unknown filter mode"):
            FilterRule(expression="*.tmp", mode="shown")

    @pytest.mark.parametrize("expression,inert", [(None, True), ("", True), ("*", False)])
    def test_is_inert(self, expression, inert):
        assert FilterRule(expression=expression).is_inert is inert

    def test_copy_for_other_storage(self):
        rule = FilterRule(
            expression="*.log",
            mode=FilterMode.INACCESSIBLE,
            description="logs",
            id=7,
            storage_id=1,
        )

        copy = rule.copy_for(2)

        assert copy.id is None
        assert copy.storage_id == 2
        assert (copy.expression, copy.mode, copy.description) == ("*.log", FilterMode.INACCESSIBLE, "logs")
        assert rule.storage_id == 1


class TestStorageSource:
    """Test suite for StorageSource."""

    def test_type_coerced_from_string(self):
        source = StorageSource(name="CN", key="cn", type="onedrive-china")

        assert source.type is StorageType.ONE_DRIVE_CHINA
        assert source.type.description == "OneDrive (21Vianet)"

    def test_name_and_key_required(self):
        with pytest.raises(ValueError):
            StorageSource(name="", key="k", type=StorageType.LOCAL)
        with pytest.raises(ValueError):
            StorageSource(name="n", key="", type=StorageType.LOCAL)
