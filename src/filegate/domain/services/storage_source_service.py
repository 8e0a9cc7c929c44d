"""Storage source service.

Creates, deletes and duplicates storage sources. Data owned by other
services (filter rules, ...) is cleaned up or copied by listeners of the
storage source event channel, which is notified after each change commits.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from filegate.core.events import (
    DispatchResult,
    StorageSourceCopyEvent,
    StorageSourceDeleteEvent,
    StorageSourceEventChannel,
)
from filegate.core.logging import get_logger
from filegate.domain.entities.storage_source import StorageSource, StorageType
from filegate.infrastructure.persistence.models import StorageSourceModel
from filegate.infrastructure.persistence.repositories import StorageSourceRepository

logger = get_logger(__name__)


class StorageSourceNotFoundError(Exception):
    """Raised when a storage source ID does not exist."""

    def __init__(self, storage_id: int) -> None:
        self.storage_id = storage_id
        super().__init__(f"Storage source {storage_id} not found")


class StorageSourceKeyExistsError(Exception):
    """Raised when a storage source key is already taken."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Storage source key '{key}' already exists")


def _to_entity(model: StorageSourceModel) -> StorageSource:
    return StorageSource(
        id=model.id,
        name=model.name,
        key=model.key,
        type=StorageType(model.type),
        enable=model.enable,
        order_num=model.order_num,
    )


class StorageSourceService:
    """Service for storage source lifecycle operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        event_channel: StorageSourceEventChannel,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Factory for database sessions.
            event_channel: Channel notified after deletions and copies.
        """
        self.session_factory = session_factory
        self.event_channel = event_channel

    async def create(self, storage_source: StorageSource) -> StorageSource:
        """Create a storage source.

        Raises:
            StorageSourceKeyExistsError: If the key is already taken.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    model = await StorageSourceRepository(session).create(
                        StorageSourceModel(
                            name=storage_source.name,
                            key=storage_source.key,
                            type=storage_source.type.value,
                            enable=storage_source.enable,
                            order_num=storage_source.order_num,
                        )
                    )
        except IntegrityError as e:
            raise StorageSourceKeyExistsError(storage_source.key) from e

        logger.info(
            "Storage source created",
            storage_id=model.id,
            storage_key=model.key,
            storage_type=model.type,
        )
        return _to_entity(model)

    async def get_by_id(self, storage_id: int) -> StorageSource | None:
        """Get a storage source by ID, or None if it does not exist."""
        async with self.session_factory() as session:
            model = await StorageSourceRepository(session).get_by_id(storage_id)
        return _to_entity(model) if model is not None else None

    async def list_all(self) -> list[StorageSource]:
        """List all storage sources by sort position."""
        async with self.session_factory() as session:
            models = await StorageSourceRepository(session).list_all()
        return [_to_entity(model) for model in models]

    async def delete_by_id(self, storage_id: int) -> DispatchResult:
        """Delete a storage source and notify listeners.

        Args:
            storage_id: ID of the storage source to delete.

        Returns:
            The dispatch result of the delete notification.

        Raises:
            StorageSourceNotFoundError: If the storage source does not exist.
        """
        async with self.session_factory() as session:
            async with session.begin():
                repository = StorageSourceRepository(session)
                model = await repository.get_by_id(storage_id)
                if model is None:
                    raise StorageSourceNotFoundError(storage_id)
                deleted = _to_entity(model)
                await repository.delete(model)

        logger.info(
            "Storage source deleted",
            storage_id=storage_id,
            storage_name=deleted.name,
            storage_type=deleted.type.value,
        )
        return await self.event_channel.publish(
            StorageSourceDeleteEvent(id=storage_id, name=deleted.name, type=deleted.type)
        )

    async def copy(self, from_id: int, name: str, key: str) -> StorageSource:
        """Duplicate a storage source under a new name and key.

        Args:
            from_id: ID of the storage source to copy.
            name: Display name of the copy.
            key: Unique key of the copy.

        Returns:
            The new storage source.

        Raises:
            StorageSourceNotFoundError: If the source does not exist.
            StorageSourceKeyExistsError: If the key is already taken.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    repository = StorageSourceRepository(session)
                    original = await repository.get_by_id(from_id)
                    if original is None:
                        raise StorageSourceNotFoundError(from_id)
                    model = await repository.create(
                        StorageSourceModel(
                            name=name,
                            key=key,
                            type=original.type,
                            enable=original.enable,
                            order_num=original.order_num,
                        )
                    )
        except IntegrityError as e:
            raise StorageSourceKeyExistsError(key) from e

        logger.info(
            "Storage source copied",
            from_storage_id=from_id,
            new_storage_id=model.id,
            storage_key=key,
        )
        result = await self.event_channel.publish(
            StorageSourceCopyEvent(from_id=from_id, new_id=model.id)
        )
        if not result.success:
            logger.warning(
                "Some storage source copy listeners failed",
                from_storage_id=from_id,
                new_storage_id=model.id,
                errors=result.errors,
            )
        return _to_entity(model)
