"""Repository for user storage source grants."""

import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filegate.infrastructure.persistence.models import UserStorageSourceModel


class UserStorageSourceRepository:
    """Repository for user_storage_sources database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_user_and_storage(
        self, user_id: str, storage_id: int
    ) -> UserStorageSourceModel | None:
        """Get the grant of one user on one storage source.

        Returns:
            The grant if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserStorageSourceModel).where(
                UserStorageSourceModel.user_id == user_id,
                UserStorageSourceModel.storage_id == storage_id,
            )
        )
        return result.scalar_one_or_none()

    async def save(
        self,
        user_id: str,
        storage_id: int,
        permissions: list[str],
        enable: bool = True,
    ) -> UserStorageSourceModel:
        """Create or replace the grant of a user on a storage source.

        Args:
            user_id: The user ID.
            storage_id: The storage source ID.
            permissions: Granted operator names.
            enable: Whether the grant is active.

        Returns:
            The created or updated grant.
        """
        grant = await self.get_by_user_and_storage(user_id, storage_id)
        if grant is None:
            grant = UserStorageSourceModel(user_id=user_id, storage_id=storage_id)
            self.session.add(grant)
        grant.enable = enable
        grant.permissions = json.dumps(permissions)
        await self.session.flush()
        return grant
