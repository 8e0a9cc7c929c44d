"""Repository for storage source operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filegate.infrastructure.persistence.models import StorageSourceModel


class StorageSourceRepository:
    """Repository for storage source database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, storage_source: StorageSourceModel) -> StorageSourceModel:
        """Insert a storage source and assign its ID."""
        self.session.add(storage_source)
        await self.session.flush()
        return storage_source

    async def get_by_id(self, storage_id: int) -> StorageSourceModel | None:
        """Get a storage source by ID.

        Returns:
            The storage source model if found, None otherwise.
        """
        result = await self.session.execute(
            select(StorageSourceModel).where(StorageSourceModel.id == storage_id)
        )
        return result.scalar_one_or_none()

    async def get_by_key(self, key: str) -> StorageSourceModel | None:
        """Get a storage source by its unique key."""
        result = await self.session.execute(
            select(StorageSourceModel).where(StorageSourceModel.key == key)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[StorageSourceModel]:
        """List storage sources by sort position, then ID."""
        result = await self.session.execute(
            select(StorageSourceModel).order_by(
                StorageSourceModel.order_num, StorageSourceModel.id
            )
        )
        return list(result.scalars().all())

    async def delete(self, storage_source: StorageSourceModel) -> None:
        """Delete a storage source."""
        await self.session.delete(storage_source)
        await self.session.flush()
