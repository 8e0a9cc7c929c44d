"""User storage source permission service.

Answers whether the user of the current request holds a given operation on a
storage source. The filter rule service uses it to let users with the
IGNORE_HIDDEN capability bypass all filtering.
"""

import json
from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from filegate.core.context import get_current_context
from filegate.core.logging import get_logger
from filegate.domain.entities.storage_permission import FileOperatorType
from filegate.infrastructure.persistence.repositories import UserStorageSourceRepository

logger = get_logger(__name__)


@runtime_checkable
class StoragePermissionChecker(Protocol):
    """Anything that can answer a permission question for the current user."""

    async def has_current_user_permission(
        self, storage_id: int, operator: FileOperatorType
    ) -> bool:
        ...


class UserStorageSourceService:
    """Resolves per-user operation grants on storage sources."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the service.

        Args:
            session_factory: Factory for database sessions.
        """
        self.session_factory = session_factory

    async def has_current_user_permission(
        self, storage_id: int, operator: FileOperatorType
    ) -> bool:
        """Check a permission for the user bound to the current request context.

        Anonymous callers hold no permissions.
        """
        context = get_current_context()
        if context is None or context.is_anonymous:
            return False
        return await self.has_permission(context.user_id, storage_id, operator)

    async def has_permission(
        self, user_id: str, storage_id: int, operator: FileOperatorType
    ) -> bool:
        """Check whether a user holds an operation on a storage source.

        Args:
            user_id: The user ID.
            storage_id: The storage source ID.
            operator: The operation to check.

        Returns:
            True if an enabled grant lists the operation.
        """
        return operator in await self.get_permissions(user_id, storage_id)

    async def get_permissions(self, user_id: str, storage_id: int) -> set[FileOperatorType]:
        """Get the operations a user holds on a storage source.

        Unknown operator names in the stored list are logged and ignored.
        """
        async with self.session_factory() as session:
            grant = await UserStorageSourceRepository(session).get_by_user_and_storage(
                user_id, storage_id
            )

        if grant is None or not grant.enable:
            return set()

        granted: set[FileOperatorType] = set()
        for name in json.loads(grant.permissions or "[]"):
            try:
                granted.add(FileOperatorType(name))
            except ValueError:
                logger.warning(
                    "Ignoring unknown storage permission",
                    user_id=user_id,
                    storage_id=storage_id,
                    permission=name,
                )
        return granted

    async def grant(
        self,
        user_id: str,
        storage_id: int,
        operators: list[FileOperatorType],
        enable: bool = True,
    ) -> None:
        """Replace the operations granted to a user on a storage source."""
        async with self.session_factory() as session:
            async with session.begin():
                await UserStorageSourceRepository(session).save(
                    user_id,
                    storage_id,
                    [operator.value for operator in operators],
                    enable=enable,
                )
        logger.info(
            "Storage permissions saved",
            user_id=user_id,
            storage_id=storage_id,
            permissions=[operator.value for operator in operators],
            enable=enable,
        )
