"""Unit tests for UserStorageSourceService."""

import json

import pytest

from filegate.core.context import request_context
from filegate.domain.entities import FileOperatorType
from filegate.domain.services import StoragePermissionChecker, UserStorageSourceService
from filegate.infrastructure.persistence.repositories import UserStorageSourceRepository


@pytest.fixture
def service(session_factory):
    return UserStorageSourceService(session_factory)


class TestUserStorageSourceService:
    """Test suite for UserStorageSourceService."""

    def test_satisfies_checker_protocol(self, service):
        assert isinstance(service, StoragePermissionChecker)

    @pytest.mark.asyncio
    async def test_no_grant(self, service, storage_id):
        assert await service.get_permissions("user-1", storage_id) == set()
        assert await service.has_permission("user-1", storage_id, FileOperatorType.DOWNLOAD) is False

    @pytest.mark.asyncio
    async def test_grant_and_check(self, service, storage_id):
        await service.grant(
            "user-1", storage_id, [FileOperatorType.DOWNLOAD, FileOperatorType.IGNORE_HIDDEN]
        )

        assert await service.has_permission("user-1", storage_id, FileOperatorType.IGNORE_HIDDEN) is True
        assert await service.has_permission("user-1", storage_id, FileOperatorType.DELETE) is False
        assert await service.has_permission("user-2", storage_id, FileOperatorType.IGNORE_HIDDEN) is False

    @pytest.mark.asyncio
    async def test_grant_replaces_previous(self, service, storage_id):
        await service.grant("user-1", storage_id, [FileOperatorType.IGNORE_HIDDEN])
        await service.grant("user-1", storage_id, [FileOperatorType.PREVIEW])

        assert await service.get_permissions("user-1", storage_id) == {FileOperatorType.PREVIEW}

    @pytest.mark.asyncio
    async def test_disabled_grant_holds_nothing(self, service, storage_id):
        await service.grant("user-1", storage_id, [FileOperatorType.IGNORE_HIDDEN], enable=False)

        assert await service.get_permissions("user-1", storage_id) == set()

    @pytest.mark.asyncio
    async def test_unknown_operator_names_ignored(self, service, storage_id, session_factory):
        async with session_factory() as session:
            async with session.begin():
                await UserStorageSourceRepository(session).save(
                    "user-1", storage_id, ["download", "teleport"]
                )

        assert await service.get_permissions("user-1", storage_id) == {FileOperatorType.DOWNLOAD}

    @pytest.mark.asyncio
    async def test_current_user_permission(self, service, storage_id):
        await service.grant("user-1", storage_id, [FileOperatorType.IGNORE_HIDDEN])

        with request_context("user-1"):
            assert await service.has_current_user_permission(storage_id, FileOperatorType.IGNORE_HIDDEN) is True
        with request_context("user-2"):
            assert await service.has_current_user_permission(storage_id, FileOperatorType.IGNORE_HIDDEN) is False

    @pytest.mark.asyncio
    async def test_anonymous_user_has_no_permission(self, service, storage_id):
        await service.grant("user-1", storage_id, [FileOperatorType.IGNORE_HIDDEN])

        assert await service.has_current_user_permission(storage_id, FileOperatorType.IGNORE_HIDDEN) is False
        with request_context(None):
            assert await service.has_current_user_permission(storage_id, FileOperatorType.IGNORE_HIDDEN) is False

    @pytest.mark.asyncio
    async def test_permissions_stored_as_json(self, service, storage_id, db_session):
        await service.grant("user-1", storage_id, [FileOperatorType.UPLOAD])

        grant = await UserStorageSourceRepository(db_session).get_by_user_and_storage("user-1", storage_id)
        assert json.loads(grant.permissions) == ["upload"]
