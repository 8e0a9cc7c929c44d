"""Repository for filter rule operations.

Provides the CRUD primitives used by the filter rule service. Methods flush
but never commit; the caller owns the transaction.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from filegate.domain.entities.filter_rule import FilterMode
from filegate.infrastructure.persistence.models import FilterRuleModel


class FilterRuleRepository:
    """Repository for filter rule database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_storage_id(self, storage_id: int) -> list[FilterRuleModel]:
        """Get all rules of a storage source in storage order.

        Args:
            storage_id: The storage source ID.

        Returns:
            List of filter rule models ordered by ID.
        """
        result = await self.session.execute(
            select(FilterRuleModel)
            .where(FilterRuleModel.storage_id == storage_id)
            .order_by(FilterRuleModel.id)
        )
        return list(result.scalars().all())

    async def find_by_storage_id_and_mode(
        self, storage_id: int, mode: FilterMode
    ) -> list[FilterRuleModel]:
        """Get the rules of one mode for a storage source in storage order.

        Args:
            storage_id: The storage source ID.
            mode: The filter mode to select.

        Returns:
            List of filter rule models ordered by ID.
        """
        result = await self.session.execute(
            select(FilterRuleModel)
            .where(
                FilterRuleModel.storage_id == storage_id,
                FilterRuleModel.mode == mode.value,
            )
            .order_by(FilterRuleModel.id)
        )
        return list(result.scalars().all())

    async def insert(self, rule: FilterRuleModel) -> FilterRuleModel:
        """Insert a filter rule and assign its ID.

        Args:
            rule: The filter rule model to insert.

        Returns:
            The inserted model with its ID populated.
        """
        self.session.add(rule)
        await self.session.flush()
        return rule

    async def delete_by_storage_id(self, storage_id: int) -> int:
        """Delete every rule of a storage source.

        Args:
            storage_id: The storage source ID.

        Returns:
            Number of rules deleted.
        """
        result = await self.session.execute(
            delete(FilterRuleModel).where(FilterRuleModel.storage_id == storage_id)
        )
        await self.session.flush()
        return result.rowcount or 0
